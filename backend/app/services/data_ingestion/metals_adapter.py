"""
Metals-API Adapter

Spot gold/silver prices. The API quotes metals per USD, so the price in USD
per troy ounce is the reciprocal of the returned rate.
"""

from typing import Optional

from app.core.config import settings
from app.services.base import ExternalAPIError, RateLimitError, ValidationError
from app.services.data_ingestion.interface import HTTPProviderAdapter, ProviderSuccess
from app.services.data_ingestion.spot import build_spot_result

METAL_SPREAD = 1.0
SUPPORTED_METALS = ("XAU", "XAG")
RATE_LIMIT_CODES = {104, 106}


def get_metal_code(symbol: str) -> Optional[str]:
    """Return the metal code embedded in a symbol, if supported."""
    symbol = symbol.upper()
    for metal in SUPPORTED_METALS:
        if metal in symbol:
            return metal
    return None


class MetalsAdapter(HTTPProviderAdapter):
    credential_key = "metals"

    @property
    def name(self) -> str:
        return "Metals API"

    async def fetch(
        self, symbol: str, timeframe: str, credential: Optional[str] = None
    ) -> ProviderSuccess:
        metal = get_metal_code(symbol)
        if metal is None:
            raise ValidationError(self.name, f"unsupported commodity {symbol}")

        async with self._new_session() as session:
            data = await self._get_json(
                session,
                f"{settings.metals_base_url}/latest",
                {
                    "access_key": credential or settings.default_api_key,
                    "base": "USD",
                    "symbols": metal,
                },
            )

        if data.get("success") is False:
            error = data.get("error") or {}
            message = error.get("info") or error.get("type") or "request failed"
            if error.get("code") in RATE_LIMIT_CODES:
                raise RateLimitError(self.name, message)
            raise ExternalAPIError(self.name, message)

        rate = float((data.get("rates") or {}).get(metal) or 0)
        if rate <= 0:
            raise ExternalAPIError(self.name, f"no rate for {metal}")

        return build_spot_result(
            self.name,
            1 / rate,
            METAL_SPREAD,
            upgrade_hint="Historical metal prices are not available from this source",
        )
