import asyncio

from tokentoss.jobs.auto_refresh import AutoRefresher
from tokentoss.services.odds_cache import OddsCache


async def test_refresher_syncs_until_stopped(store, provider_factory, raw_game, now):
    provider = provider_factory([raw_game("evt-1")])
    cache = OddsCache(provider, store)
    refresher = AutoRefresher(cache, interval_seconds=0.01, clock=lambda: now)

    task = refresher.start()
    assert refresher.start() is task
    await asyncio.sleep(0.05)
    await refresher.stop()

    assert task.cancelled()
    assert refresher.running is False
    # every tick after the first is inside the cache window
    assert provider.calls == 1
    assert len(store.games) == 1


async def test_stop_without_start_is_a_noop(store, provider_factory):
    refresher = AutoRefresher(OddsCache(provider_factory(), store))
    await refresher.stop()
    assert refresher.running is False
