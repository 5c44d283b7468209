from typing import Any


class InMemoryCacheStore:
    """
    Process-local store with the subset of the redis.asyncio API used by
    CacheFacade. Expiry is ignored: cached upstream data never changes.
    """

    def __init__(self):
        self._data: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        return self._data.get(key)

    async def set(self, key: str, value: Any, ex: int | None = None) -> bool:
        self._data[key] = value
        return True
