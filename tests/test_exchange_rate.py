"""Tests for the exchange rate service. No real HTTP: fetchers and transports are faked."""

import asyncio
from decimal import Decimal

import httpx
import pytest

from lifeos.models import RateSource
from lifeos.services.currency import (
    ExchangeRateService,
    HttpRateFetcher,
    RateCache,
    RateUnavailableError,
    parse_rate_payload,
)


def make_service(rate_settings, clock, fetcher):
    return ExchangeRateService(settings=rate_settings, fetcher=fetcher, clock=clock)


class TestParseRatePayload:
    """Tests for parse_rate_payload."""

    def test_extracts_try_rate(self):
        assert parse_rate_payload({"rates": {"TRY": 36.52, "EUR": 0.92}}) == Decimal("36.52")

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            {},
            {"rates": None},
            {"rates": {"EUR": 0.92}},
            {"rates": {"TRY": "abc"}},
            {"rates": {"TRY": 0}},
            {"rates": {"TRY": -1}},
            {"rates": {"TRY": True}},
            {"rates": {"TRY": "NaN"}},
        ],
    )
    def test_unusable_payloads_raise(self, payload):
        with pytest.raises(RateUnavailableError):
            parse_rate_payload(payload)


class TestRateCache:
    """Tests for RateCache freshness."""

    def test_empty_cache_is_not_fresh(self, fixed_now):
        assert RateCache(ttl_seconds=900).is_fresh(fixed_now) is False


class TestExchangeRateService:
    """Tests for get_rate resolution order."""

    @pytest.mark.asyncio
    async def test_live_fetch_is_cached(self, rate_settings, clock, make_fetcher):
        fetcher = make_fetcher(Decimal("36.00"))
        service = make_service(rate_settings, clock, fetcher)

        first = await service.get_rate()
        second = await service.get_rate()

        assert first.source == RateSource.LIVE
        assert first.rate == Decimal("36.00")
        assert second.source == RateSource.CACHE
        assert second.rate == Decimal("36.00")
        assert fetcher.calls == 1

    @pytest.mark.asyncio
    async def test_expired_cache_is_refreshed(self, rate_settings, clock, make_fetcher):
        fetcher = make_fetcher(Decimal("36.00"), Decimal("37.00"))
        service = make_service(rate_settings, clock, fetcher)

        await service.get_rate()
        clock.advance(minutes=16)
        assert service.is_cache_stale() is True

        refreshed = await service.get_rate()
        assert refreshed.source == RateSource.LIVE
        assert refreshed.rate == Decimal("37.00")
        assert fetcher.calls == 2

    @pytest.mark.asyncio
    async def test_failed_refresh_serves_stale_cache(self, rate_settings, clock, make_fetcher):
        fetcher = make_fetcher(Decimal("36.00"), RateUnavailableError("down"))
        service = make_service(rate_settings, clock, fetcher)

        await service.get_rate()
        clock.advance(minutes=20)
        stale = await service.get_rate()

        assert stale.source == RateSource.STALE_CACHE
        assert stale.rate == Decimal("36.00")
        assert stale.is_degraded

    @pytest.mark.asyncio
    async def test_no_cache_falls_back(self, rate_settings, clock, make_fetcher):
        service = make_service(rate_settings, clock, make_fetcher(httpx.ConnectError("boom")))

        rate = await service.get_rate()

        assert rate.source == RateSource.FALLBACK
        assert rate.rate == Decimal("36.5")
        assert service.get_cached_rate() is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [KeyError("TRY"), RuntimeError("sdk failure")])
    async def test_any_fetcher_error_degrades(self, rate_settings, clock, make_fetcher, error):
        """An unexpected exception from an injected fetcher never reaches the caller."""
        fetcher = make_fetcher(Decimal("36.00"), error)
        service = make_service(rate_settings, clock, fetcher)

        fallback = await make_service(rate_settings, clock, make_fetcher(error)).get_rate()
        await service.get_rate()
        clock.advance(minutes=20)
        stale = await service.get_rate()

        assert fallback.source == RateSource.FALLBACK
        assert stale.source == RateSource.STALE_CACHE

    @pytest.mark.asyncio
    async def test_non_positive_rate_treated_as_unavailable(self, rate_settings, clock, make_fetcher):
        service = make_service(rate_settings, clock, make_fetcher(Decimal("0")))
        rate = await service.get_rate()
        assert rate.source == RateSource.FALLBACK

    @pytest.mark.asyncio
    async def test_slow_fetch_times_out_to_fallback(self, rate_settings, clock):
        async def slow_fetcher():
            await asyncio.sleep(5)
            return Decimal("36.00")

        service = make_service(rate_settings, clock, slow_fetcher)
        rate = await service.get_rate()
        assert rate.source == RateSource.FALLBACK

    @pytest.mark.asyncio
    async def test_concurrent_refreshes_are_tolerated(self, rate_settings, clock, make_fetcher):
        fetcher = make_fetcher(Decimal("36.00"))
        service = make_service(rate_settings, clock, fetcher)

        rates = await asyncio.gather(service.get_rate(), service.get_rate())

        assert all(rate.rate == Decimal("36.00") for rate in rates)
        assert 1 <= fetcher.calls <= 2


class TestHttpRateFetcher:
    """Tests for the httpx-backed fetcher using a mock transport."""

    @pytest.mark.asyncio
    async def test_reads_try_rate(self, rate_settings):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, json={"rates": {"TRY": 34.25}})
        )
        fetcher = HttpRateFetcher(rate_settings, transport=transport)
        assert await fetcher() == Decimal("34.25")

    @pytest.mark.asyncio
    async def test_http_error_raises(self, rate_settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        fetcher = HttpRateFetcher(rate_settings, transport=transport)
        with pytest.raises(httpx.HTTPStatusError):
            await fetcher()

    @pytest.mark.asyncio
    async def test_malformed_json_raises(self, rate_settings):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="not json"))
        fetcher = HttpRateFetcher(rate_settings, transport=transport)
        with pytest.raises(RateUnavailableError):
            await fetcher()

    @pytest.mark.asyncio
    async def test_service_degrades_on_http_failure(self, rate_settings, clock):
        transport = httpx.MockTransport(lambda request: httpx.Response(500))
        service = ExchangeRateService(
            settings=rate_settings,
            fetcher=HttpRateFetcher(rate_settings, transport=transport),
            clock=clock,
        )
        rate = await service.get_rate()
        assert rate.source == RateSource.FALLBACK
