import logging
import pytest
from unittest.mock import AsyncMock
from redis.exceptions import ConnectionError as RedisConnectionError
from fakeredis.aioredis import FakeRedis
from pokedex.cache import CacheFacade, InMemoryCacheStore, build_cache_store
from pokedex.config import Settings


@pytest.fixture
def redis_client():
    """Provides a fake Redis client for testing."""
    return FakeRedis(decode_responses=True)


@pytest.fixture
def cache(redis_client):
    return CacheFacade(redis_client)


@pytest.fixture
def broken_store():
    """A store whose every operation fails, like an unreachable Redis."""
    store = AsyncMock()
    store.get.side_effect = RedisConnectionError("Connection refused")
    store.set.side_effect = RedisConnectionError("Connection refused")
    return store


@pytest.mark.asyncio
async def test_get_returns_stored_value(cache):
    await cache.set("species:mewtwo", {"name": "mewtwo", "is_legendary": True})

    assert await cache.get("species:mewtwo") == {"name": "mewtwo", "is_legendary": True}


@pytest.mark.asyncio
async def test_get_missing_key_returns_none(cache):
    assert await cache.get("species:missingno") is None


@pytest.mark.asyncio
async def test_zero_ttl_writes_without_expiry(cache, redis_client):
    await cache.set("translation:yoda:abc", "Created by scientist, it was.", ttl=0)

    # -1 means the key exists with no expiry
    assert await redis_client.ttl("translation:yoda:abc") == -1


@pytest.mark.asyncio
async def test_positive_ttl_sets_expiry(cache, redis_client):
    await cache.set("species:ditto", {"name": "ditto"}, ttl=60)

    assert 0 < await redis_client.ttl("species:ditto") <= 60


@pytest.mark.asyncio
async def test_read_failure_degrades_to_miss(broken_store, caplog):
    cache = CacheFacade(broken_store)

    with caplog.at_level(logging.WARNING, logger="pokedex.cache.facade"):
        result = await cache.get("species:pikachu")

    assert result is None
    assert "Cache read operation failed" in caplog.text


@pytest.mark.asyncio
async def test_write_failure_is_silent(broken_store, caplog):
    cache = CacheFacade(broken_store)

    with caplog.at_level(logging.WARNING, logger="pokedex.cache.facade"):
        await cache.set("species:pikachu", {"name": "pikachu"}, ttl=0)

    broken_store.set.assert_awaited_once()
    assert "Cache write operation failed" in caplog.text


@pytest.mark.asyncio
async def test_corrupt_entry_is_treated_as_miss(cache, redis_client):
    await redis_client.set("species:corrupt", "{not json")

    assert await cache.get("species:corrupt") is None


@pytest.mark.asyncio
async def test_unserializable_value_is_not_written(cache, redis_client):
    await cache.set("species:bad", object())

    assert await redis_client.get("species:bad") is None


@pytest.mark.asyncio
async def test_in_memory_store_round_trip():
    cache = CacheFacade(InMemoryCacheStore())

    await cache.set("species:eevee", {"name": "eevee"})

    assert await cache.get("species:eevee") == {"name": "eevee"}
    # No close() on the in-memory store: close must be a no-op
    await cache.close()


@pytest.mark.asyncio
async def test_in_memory_store_ignores_expiry():
    store = InMemoryCacheStore()

    assert await store.set("species:ditto", "{}", ex=60) is True
    assert await store.get("species:ditto") == "{}"
    assert await store.get("species:mew") is None


def test_build_cache_store_selects_backend():
    assert isinstance(build_cache_store(Settings(cache_backend="memory")), InMemoryCacheStore)
    assert not isinstance(build_cache_store(Settings(cache_backend="redis")), InMemoryCacheStore)
