# nosec B101


import asyncio
from datetime import timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

from domain.exceptions.currency import NormalizationError, ProviderError
from domain.models.currency import InvalidQuotePolicy
from infrastructure.cache.memory_cache import InMemoryCacheService
from infrastructure.providers.base import RateSourceClient
from application.services.normalizer import RateNormalizer
from application.services.rate_store import CachedRateStore


def make_source(*, side_effect=None, return_value=None):
    source = AsyncMock(spec=RateSourceClient)
    source.name = 'cnb'
    source.endpoint = 'http://cnb.test'
    if side_effect is not None:
        source.fetch_daily_rates.side_effect = side_effect
    else:
        source.fetch_daily_rates.return_value = return_value
    return source


def make_store(source, clock, policy=InvalidQuotePolicy.SKIP, ttl=timedelta(minutes=5)):
    normalizer = RateNormalizer('CZK', policy=policy)
    normalizer.normalize = Mock(wraps=normalizer.normalize)
    cache = InMemoryCacheService(clock=clock)
    return CachedRateStore(source, normalizer, cache, ttl=ttl)


def gated(quotes):
    """A fetch that blocks until the returned event is set."""
    release = asyncio.Event()
    started = asyncio.Event()

    async def fetch():
        started.set()
        await release.wait()
        return quotes

    return fetch, started, release


# =================================
# Cache-aside
# =================================


@pytest.mark.asyncio
async def test_miss_fetches_normalizes_and_caches(clock, daily_quotes):
    source = make_source(return_value=daily_quotes)
    store = make_store(source, clock)

    rates = await store.get_daily_rates()

    assert isinstance(rates, tuple)
    assert [r.value for r in rates] == [Decimal('22.50'), Decimal('24.00'), Decimal('0.17')]
    assert store.cache.get('dailyRates:CZK') == rates
    source.fetch_daily_rates.assert_awaited_once()


@pytest.mark.asyncio
async def test_hit_does_not_fetch(clock, daily_quotes):
    source = make_source(return_value=daily_quotes)
    store = make_store(source, clock)

    first = await store.get_daily_rates()
    second = await store.get_daily_rates()

    assert second is first
    assert source.fetch_daily_rates.await_count == 1
    assert store.normalizer.normalize.call_count == 1


@pytest.mark.asyncio
async def test_ttl_expiry_refetches(clock, daily_quotes):
    source = make_source(return_value=daily_quotes)
    store = make_store(source, clock)

    await store.get_daily_rates()
    clock.advance(299)
    await store.get_daily_rates()
    assert source.fetch_daily_rates.await_count == 1

    clock.advance(2)
    await store.get_daily_rates()
    assert source.fetch_daily_rates.await_count == 2


@pytest.mark.asyncio
async def test_ttl_starts_at_population(clock, daily_quotes):
    async def slow_fetch():
        clock.advance(60)
        return daily_quotes

    source = make_source(side_effect=slow_fetch)
    store = make_store(source, clock)

    await store.get_daily_rates()
    clock.advance(299)
    await store.get_daily_rates()

    assert source.fetch_daily_rates.await_count == 1


@pytest.mark.asyncio
async def test_empty_daily_set_is_cached(clock):
    source = make_source(return_value=[])
    store = make_store(source, clock)

    assert await store.get_daily_rates() == ()
    assert await store.get_daily_rates() == ()
    assert source.fetch_daily_rates.await_count == 1


# =================================
# Single-flight
# =================================


@pytest.mark.asyncio
async def test_concurrent_callers_share_one_fetch(clock, daily_quotes):
    fetch, started, release = gated(daily_quotes)
    source = make_source(side_effect=fetch)
    store = make_store(source, clock)

    tasks = [asyncio.create_task(store.get_daily_rates()) for _ in range(10)]
    await started.wait()
    release.set()
    results = await asyncio.gather(*tasks)

    assert source.fetch_daily_rates.await_count == 1
    assert store.normalizer.normalize.call_count == 1
    assert all(r is results[0] for r in results)


@pytest.mark.asyncio
async def test_failure_reaches_every_caller_and_is_not_cached(clock, daily_quotes):
    calls = 0

    async def fetch():
        nonlocal calls
        calls += 1
        if calls == 1:
            await asyncio.sleep(0.01)
            raise ProviderError('CNB request failed: ConnectError')
        return daily_quotes

    source = make_source(side_effect=fetch)
    store = make_store(source, clock)

    results = await asyncio.gather(
        *(store.get_daily_rates() for _ in range(5)), return_exceptions=True
    )

    assert calls == 1
    assert all(isinstance(r, ProviderError) for r in results)
    assert store.cache.get('dailyRates:CZK') is None

    rates = await store.get_daily_rates()
    assert calls == 2
    assert len(rates) == 3


@pytest.mark.asyncio
async def test_fail_policy_error_propagates(clock, make_quote):
    source = make_source(return_value=[make_quote('USD', 0, '22.50')])
    store = make_store(source, clock, policy=InvalidQuotePolicy.FAIL)

    with pytest.raises(NormalizationError):
        await store.get_daily_rates()

    assert store.cache.get('dailyRates:CZK') is None


# =================================
# Cancellation
# =================================


@pytest.mark.asyncio
async def test_cancelled_waiter_detaches(clock, daily_quotes):
    fetch, started, release = gated(daily_quotes)
    source = make_source(side_effect=fetch)
    store = make_store(source, clock)

    owner = asyncio.create_task(store.get_daily_rates())
    await started.wait()
    waiter = asyncio.create_task(store.get_daily_rates())
    await asyncio.sleep(0)

    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    release.set()
    rates = await owner

    assert len(rates) == 3
    assert store.cache.get('dailyRates:CZK') == rates
    assert source.fetch_daily_rates.await_count == 1


@pytest.mark.asyncio
async def test_cancelled_owner_cancels_fetch_and_waiter_refetches(clock, daily_quotes):
    fetch_cancelled = asyncio.Event()
    calls = 0

    async def fetch():
        nonlocal calls
        calls += 1
        if calls == 1:
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                fetch_cancelled.set()
                raise
        return daily_quotes

    source = make_source(side_effect=fetch)
    store = make_store(source, clock)

    owner = asyncio.create_task(store.get_daily_rates())
    await asyncio.sleep(0.01)
    waiter = asyncio.create_task(store.get_daily_rates())
    await asyncio.sleep(0.01)

    owner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await owner
    assert fetch_cancelled.is_set()

    rates = await asyncio.wait_for(waiter, timeout=1)

    assert calls == 2
    assert len(rates) == 3


@pytest.mark.asyncio
async def test_cancelled_owner_without_waiters_caches_nothing(clock, daily_quotes):
    fetch, started, release = gated(daily_quotes)
    source = make_source(side_effect=fetch)
    store = make_store(source, clock)

    owner = asyncio.create_task(store.get_daily_rates())
    await started.wait()
    owner.cancel()
    with pytest.raises(asyncio.CancelledError):
        await owner

    assert store.cache.get('dailyRates:CZK') is None
    store.client.fetch_daily_rates.side_effect = None
    store.client.fetch_daily_rates.return_value = daily_quotes
    assert len(await store.get_daily_rates()) == 3
