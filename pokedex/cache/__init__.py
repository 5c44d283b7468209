"""Cache access with graceful degradation."""
import redis.asyncio as aioredis

from pokedex.config import Settings

from .facade import CacheFacade, CacheStore
from .memory import InMemoryCacheStore


def build_cache_store(settings: Settings) -> CacheStore:
    """Creates the store selected by `cache_backend`. Redis connects lazily on first use."""
    if settings.cache_backend == "memory":
        return InMemoryCacheStore()
    return aioredis.from_url(settings.redis_url, decode_responses=True)


__all__ = [
    'CacheFacade',
    'CacheStore',
    'InMemoryCacheStore',
    'build_cache_store',
]
