# =============================================================================
# tests/test_cache.py - Read-Through Cache Tests
# =============================================================================
# Uses an in-memory Redis double with a hand-driven clock to check TTL
# behaviour without sleeping.
# =============================================================================

import pytest

from lib.cache import ReadThroughCache


class CountingLoader:
    """Async loader that records how often it ran."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        return self.value


@pytest.mark.asyncio
class TestReadThroughCache:

    async def test_miss_loads_and_stores(self, cache, redis_client):
        loader = CountingLoader({"id": "abc", "talk_about": "website"})

        value = await cache.get_or_load("abc", loader)

        assert value == {"id": "abc", "talk_about": "website"}
        assert loader.calls == 1
        assert "contact-us:abc" in redis_client.store

    async def test_hit_within_ttl_skips_loader(self, cache):
        loader = CountingLoader({"id": "abc"})

        await cache.get_or_load("abc", loader)
        await cache.get_or_load("abc", loader)

        assert loader.calls == 1

    async def test_expired_entry_reloads(self, cache, clock):
        first = CountingLoader({"id": "abc", "budget": "old"})
        second = CountingLoader({"id": "abc", "budget": "new"})

        await cache.get_or_load("abc", first)
        clock.advance(2.9)
        assert (await cache.get_or_load("abc", second))["budget"] == "old"

        clock.advance(0.2)
        assert (await cache.get_or_load("abc", second))["budget"] == "new"
        assert second.calls == 1

    async def test_loader_failure_propagates_and_caches_nothing(self, cache, redis_client):
        async def failing_loader():
            raise RuntimeError("database down")

        with pytest.raises(RuntimeError, match="database down"):
            await cache.get_or_load("abc", failing_loader)

        assert redis_client.store == {}

    async def test_none_is_not_cached(self, cache, redis_client):
        loader = CountingLoader(None)

        assert await cache.get_or_load("missing", loader) is None
        assert await cache.get_or_load("missing", loader) is None

        assert loader.calls == 2
        assert redis_client.store == {}

    async def test_evict_forces_reload(self, cache):
        loader = CountingLoader({"id": "abc"})

        await cache.get_or_load("abc", loader)
        await cache.evict("abc")
        await cache.get_or_load("abc", loader)

        assert loader.calls == 2

    async def test_redis_outage_falls_back_to_loader(self, cache, redis_client):
        redis_client.broken = True
        loader = CountingLoader({"id": "abc"})

        assert await cache.get_or_load("abc", loader) == {"id": "abc"}
        await cache.evict("abc")
        assert await cache.ping() is False

    async def test_close(self, cache, redis_client):
        await cache.close()

        assert redis_client.closed


def test_namespace_is_applied(redis_client):
    cache = ReadThroughCache(redis_client, ttl_seconds=3, namespace="other")

    assert cache._key("abc") == "other:abc"
