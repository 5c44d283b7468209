import json
import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    """The part of the redis.asyncio client the facade relies on."""

    async def get(self, key: str) -> Any: ...

    async def set(self, key: str, value: Any, ex: int | None = None) -> Any: ...


class CacheFacade:
    """
    Fault-tolerant access to a shared key/value store.

    Any store failure is logged and degrades to a cache miss (reads) or a
    no-op (writes), so callers never handle cache errors themselves.
    Values are stored as JSON strings.
    """

    def __init__(self, store: CacheStore):
        self.store = store

    async def get(self, key: str) -> Any | None:
        try:
            raw = await self.store.get(key)
            if raw is None:
                return None
            return json.loads(raw)
        except Exception as e:
            logger.warning(f"Cache read operation failed for {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: int = 0) -> None:
        """Stores `value` under `key`. A ttl of 0 means the entry never expires."""
        try:
            payload = json.dumps(value)
            if ttl > 0:
                await self.store.set(key, payload, ex=ttl)
            else:
                await self.store.set(key, payload)
        except Exception as e:
            logger.warning(f"Cache write operation failed for {key}: {e}")

    async def close(self) -> None:
        """Close the underlying store connection, if it has one."""
        close = getattr(self.store, "aclose", None) or getattr(self.store, "close", None)
        if close is None:
            return
        try:
            await close()
        except Exception as e:
            logger.warning(f"Cache close failed: {e}")
