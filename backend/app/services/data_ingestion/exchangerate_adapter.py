"""
ExchangeRate-API Adapter

Free, keyless latest rates. Last real forex source before synthetic data.
"""

from typing import Optional

from app.core.config import settings
from app.services.base import ExternalAPIError
from app.services.data_ingestion.interface import HTTPProviderAdapter, ProviderSuccess
from app.services.data_ingestion.spot import FOREX_SPREAD, build_spot_result, split_pair


class ExchangeRateAdapter(HTTPProviderAdapter):
    @property
    def name(self) -> str:
        return "Exchange Rate API (Free)"

    async def fetch(
        self, symbol: str, timeframe: str, credential: Optional[str] = None
    ) -> ProviderSuccess:
        base_ccy, quote_ccy = split_pair(symbol)

        async with self._new_session() as session:
            data = await self._get_json(
                session, f"{settings.exchangerate_base_url}/latest/{base_ccy}"
            )

        if data.get("result") == "error":
            raise ExternalAPIError(self.name, data.get("error-type", "request failed"))

        rate = (data.get("rates") or {}).get(quote_ccy)
        if not rate:
            raise ExternalAPIError(self.name, f"no rate for {base_ccy}/{quote_ccy}")

        return build_spot_result(
            self.name,
            rate,
            FOREX_SPREAD,
            upgrade_hint="Add a Twelve Data key for full analysis",
        )
