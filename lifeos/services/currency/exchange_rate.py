"""
USD/TRY Exchange Rate Service

DESIGN DECISION: The rate is the only I/O in the engine, and it must
never be the reason a dashboard fails. get_rate() always resolves:

1. Fresh cache entry          -> served as CACHE
2. Successful refresh         -> served as LIVE and cached
3. Refresh failed, old value  -> last known rate as STALE_CACHE
4. Refresh failed, no value   -> hardcoded fallback as FALLBACK

Any exception from the fetcher (HTTP errors, timeouts, malformed JSON,
a missing TRY field, or whatever an injected fetcher raises) is treated
the same way: rate unavailable.

The cache is an explicit object owned by whoever builds the service,
not a module global, so tests can inject a clock and a fetcher.
Concurrent callers may both refresh an expired entry; that duplicate
fetch is tolerated rather than prevented with a lock.
"""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Optional

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from lifeos.audit import get_logger
from lifeos.config import ExchangeRateSettings, get_settings
from lifeos.models.finance import ExchangeRateData, RateSource


logger = get_logger(__name__)

RateFetcher = Callable[[], Awaitable[Decimal]]
Clock = Callable[[], datetime]


class RateUnavailableError(Exception):
    """The external rate source could not provide a usable rate."""
    pass


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_rate_payload(payload: Any) -> Decimal:
    """
    Extract TRY per USD from a rates-relative-to-USD payload.

    Expected shape: {"rates": {"TRY": 36.52, ...}, ...}
    """
    if not isinstance(payload, dict):
        raise RateUnavailableError("Rate payload is not a JSON object")
    rates = payload.get("rates")
    if not isinstance(rates, dict):
        raise RateUnavailableError("Rate payload has no 'rates' mapping")
    raw = rates.get("TRY")
    if raw is None or isinstance(raw, bool):
        raise RateUnavailableError("TRY rate not found")
    try:
        rate = Decimal(str(raw))
    except InvalidOperation:
        raise RateUnavailableError(f"TRY rate is not numeric: {raw!r}") from None
    if not rate.is_finite() or rate <= 0:
        raise RateUnavailableError(f"TRY rate is not positive: {raw!r}")
    return rate


class HttpRateFetcher:
    """Fetches the rate over HTTP with a short retry."""

    def __init__(
        self,
        settings: Optional[ExchangeRateSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings or get_settings().exchange_rate
        self._transport = transport

    async def __call__(self) -> Decimal:
        async with httpx.AsyncClient(
            timeout=self._settings.timeout_seconds,
            transport=self._transport,
        ) as client:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self._settings.max_attempts),
                wait=wait_exponential(multiplier=0.5, min=0.5, max=2),
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await client.get(self._settings.api_url)
                    response.raise_for_status()
        try:
            payload = response.json()
        except ValueError:
            raise RateUnavailableError("Rate response is not valid JSON") from None
        return parse_rate_payload(payload)


class RateCache:
    """A single best-effort memo: last rate, when it was stored, and a TTL."""

    def __init__(self, ttl_seconds: float):
        self.ttl_seconds = ttl_seconds
        self.value: Optional[ExchangeRateData] = None
        self.stored_at: Optional[datetime] = None

    def store(self, value: ExchangeRateData, now: datetime) -> None:
        self.value = value
        self.stored_at = now

    def is_fresh(self, now: datetime) -> bool:
        if self.value is None or self.stored_at is None:
            return False
        return (now - self.stored_at).total_seconds() < self.ttl_seconds


class ExchangeRateService:
    """
    Provides the current USD/TRY rate.

    All collaborators are injectable: `fetcher` (async callable
    returning a Decimal), `cache` and `clock`.
    """

    def __init__(
        self,
        settings: Optional[ExchangeRateSettings] = None,
        fetcher: Optional[RateFetcher] = None,
        cache: Optional[RateCache] = None,
        clock: Optional[Clock] = None,
    ):
        self._settings = settings or get_settings().exchange_rate
        self._fetcher = fetcher or HttpRateFetcher(self._settings)
        self._cache = cache or RateCache(self._settings.cache_ttl_seconds)
        self._clock = clock or utc_now

    async def get_rate(self) -> ExchangeRateData:
        """Current rate. Never raises."""
        now = self._clock()
        cached = self._cache.value

        if cached is not None and self._cache.is_fresh(now):
            return cached.model_copy(update={"source": RateSource.CACHE})

        try:
            rate = await asyncio.wait_for(self._fetcher(), timeout=self._settings.timeout_seconds)
            rate = Decimal(str(rate))
            if not rate.is_finite() or rate <= 0:
                raise RateUnavailableError(f"Fetched rate is not positive: {rate}")
        except Exception as e:
            # Any fetcher failure degrades; log it but don't raise
            logger.warning(
                "exchange_rate_refresh_failed",
                error=str(e) or type(e).__name__,
                has_cached_rate=cached is not None,
            )
            if cached is not None:
                return cached.model_copy(update={"source": RateSource.STALE_CACHE})
            return ExchangeRateData(
                rate=Decimal(str(self._settings.fallback_rate)),
                timestamp=now,
                source=RateSource.FALLBACK,
            )

        fresh = ExchangeRateData(rate=rate, timestamp=now, source=RateSource.LIVE)
        self._cache.store(fresh, now)
        return fresh

    def get_cached_rate(self) -> Optional[ExchangeRateData]:
        """Last fetched rate without any I/O, or None."""
        return self._cache.value

    def is_cache_stale(self) -> bool:
        return not self._cache.is_fresh(self._clock())
