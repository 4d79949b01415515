import time

from src.core.cache.interface import ExpiringCache


def _now() -> float:
    return time.monotonic()


class MemoryExpiringCache(ExpiringCache):
    """
    In-process expiring cache.

    Expiry is lazy: an entry past its deadline is dropped the next time it is
    read or deleted. Entries live only as long as the process, so every worker
    keeps its own copy.
    """

    backend_name = "memory"

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self._expires: dict[str, float] = {}

    def _purge_expired(self, key: str) -> None:
        expires_at = self._expires.get(key)
        if expires_at is None:
            return
        if _now() >= expires_at:
            self._store.pop(key, None)
            self._expires.pop(key, None)

    async def get_value(self, key: str) -> str | None:
        self._purge_expired(key)
        return self._store.get(key)

    async def set_value(self, key: str, value: str, ttl: int) -> None:
        if ttl <= 0:
            raise ValueError("ttl must be a positive number of seconds")
        self._store[key] = value
        self._expires[key] = _now() + ttl

    async def delete(self, key: str) -> None:
        self._store.pop(key, None)
        self._expires.pop(key, None)

    def __len__(self) -> int:
        for key in list(self._store):
            self._purge_expired(key)
        return len(self._store)
