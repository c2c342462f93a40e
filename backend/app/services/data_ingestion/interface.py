"""
Provider Adapter Interface

Defines the contract every upstream market-data source implements, plus the
tagged result the orchestrator consumes.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Union

import aiohttp

from app.core.config import settings
from app.schemas.indicators import IndicatorSet, SupportResistance
from app.schemas.market import LatestQuote, OHLCVSeries, Timeframe
from app.services.base import ExternalAPIError, RateLimitError, ServiceError

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUSES = (418, 429)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class ProviderSuccess:
    """A fully usable series + quote from one provider."""

    provider: str
    series: OHLCVSeries
    quote: LatestQuote
    note: Optional[str] = None
    degraded: bool = False  # True when only a spot value was available


@dataclass(frozen=True)
class ProviderFailure:
    """Provider could not supply data; reason is logged, never raised."""

    provider: str
    reason: str


ProviderResult = Union[ProviderSuccess, ProviderFailure]


@dataclass(frozen=True)
class SnapshotIngredients:
    """
    Everything the snapshot assembler needs.

    Real providers only supply series + quote; the synthetic generator
    also presets indicators, patterns and levels.
    """

    source: str
    series: OHLCVSeries
    quote: LatestQuote
    note: Optional[str] = None
    indicators: Optional[IndicatorSet] = None
    patterns: Optional[list[str]] = None
    support_resistance: Optional[SupportResistance] = None

    @classmethod
    def from_success(cls, result: ProviderSuccess) -> "SnapshotIngredients":
        return cls(
            source=result.provider,
            series=result.series,
            quote=result.quote,
            note=result.note,
        )


class ProviderAdapter(ABC):
    """
    One upstream market-data source.

    Subclasses implement `fetch`, which raises on any problem. `try_fetch`
    turns those problems into a ProviderFailure so callers never see a
    provider exception.
    """

    # Key looked up in the request's apiKeys map; None for keyless providers
    credential_key: Optional[str] = None

    # Timeframe code -> provider interval
    timeframe_map: dict[Timeframe, str] = {}
    default_interval: str = "1h"

    @property
    @abstractmethod
    def name(self) -> str:
        """Provenance label used in the snapshot's source field."""
        pass

    def resolve_interval(self, timeframe: str) -> str:
        """Map a timeframe code; unknown codes fall back to hourly."""
        return self.timeframe_map.get(timeframe, self.default_interval)

    def resolve_credential(self, credentials: Optional[dict[str, str]]) -> Optional[str]:
        if self.credential_key is None:
            return None
        if credentials and credentials.get(self.credential_key):
            return credentials[self.credential_key]
        return settings.default_api_key

    @abstractmethod
    async def fetch(
        self, symbol: str, timeframe: str, credential: Optional[str] = None
    ) -> ProviderSuccess:
        """Fetch and normalize; raise ServiceError (or parse errors) on failure."""
        pass

    async def try_fetch(
        self, symbol: str, timeframe: str, credential: Optional[str] = None
    ) -> ProviderResult:
        """Fetch, converting every expected failure into a ProviderFailure."""
        try:
            return await self.fetch(symbol, timeframe, credential)
        except RateLimitError as e:
            return ProviderFailure(self.name, f"rate limited: {e.message}")
        except ServiceError as e:
            return ProviderFailure(self.name, e.message)
        except aiohttp.ClientError as e:
            return ProviderFailure(self.name, f"network error: {e}")
        except (ValueError, KeyError, TypeError, AttributeError, IndexError, ZeroDivisionError) as e:
            return ProviderFailure(self.name, f"malformed payload: {e!r}")


class HTTPProviderAdapter(ProviderAdapter):
    """Adapter backed by a JSON-over-HTTP API."""

    def _new_session(self) -> aiohttp.ClientSession:
        return aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=settings.provider_timeout_seconds),
            headers={"Accept": "application/json"},
        )

    async def _get_json(
        self,
        session: aiohttp.ClientSession,
        url: str,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """GET a JSON document, mapping HTTP errors onto service errors."""
        async with session.get(url, params=params) as resp:
            if resp.status in RATE_LIMIT_STATUSES:
                raise RateLimitError(self.name, f"HTTP {resp.status}")
            if resp.status != 200:
                body = await resp.text()
                raise ExternalAPIError(
                    self.name, f"HTTP {resp.status}", {"body": body[:200]}
                )
            return await resp.json(content_type=None)
