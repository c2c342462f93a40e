"""
Fixer.io Adapter

Latest forex rate only (no history). Produces a degraded spot result.
"""

from typing import Optional

from app.core.config import settings
from app.services.base import ExternalAPIError, RateLimitError
from app.services.data_ingestion.interface import HTTPProviderAdapter, ProviderSuccess
from app.services.data_ingestion.spot import FOREX_SPREAD, build_spot_result, split_pair

# Fixer error codes for exhausted quotas
RATE_LIMIT_CODES = {104, 106}


class FixerAdapter(HTTPProviderAdapter):
    credential_key = "fixer"

    @property
    def name(self) -> str:
        return "Fixer.io"

    async def fetch(
        self, symbol: str, timeframe: str, credential: Optional[str] = None
    ) -> ProviderSuccess:
        base_ccy, quote_ccy = split_pair(symbol)

        async with self._new_session() as session:
            data = await self._get_json(
                session,
                f"{settings.fixer_base_url}/latest",
                {
                    "access_key": credential or settings.default_api_key,
                    "base": base_ccy,
                    "symbols": quote_ccy,
                },
            )

        if data.get("success") is False:
            error = data.get("error") or {}
            message = error.get("info") or error.get("type") or "request failed"
            if error.get("code") in RATE_LIMIT_CODES:
                raise RateLimitError(self.name, message)
            raise ExternalAPIError(self.name, message)

        rate = (data.get("rates") or {}).get(quote_ccy)
        if not rate:
            raise ExternalAPIError(self.name, f"no rate for {base_ccy}/{quote_ccy}")

        return build_spot_result(
            self.name,
            rate,
            FOREX_SPREAD,
            upgrade_hint="Add a Twelve Data key for full analysis",
        )
