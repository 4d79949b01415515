from redis.asyncio import Redis
from redis.exceptions import RedisError

from loggers import get_logger
from src.core.cache.interface import CacheBackendError, ExpiringCache

logger = get_logger(__name__)


class RedisExpiringCache(ExpiringCache):
    """Expiring cache on top of a shared ``redis.asyncio`` client."""

    backend_name = "redis"

    def __init__(self, redis_client: Redis) -> None:
        self.redis = redis_client

    @staticmethod
    def _normalize(value: str | bytes | None) -> str | None:
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def get_value(self, key: str) -> str | None:
        try:
            value = await self.redis.get(key)
        except RedisError as exc:
            logger.error("Redis GET failed: %s", exc)
            raise CacheBackendError("Cache is unavailable") from exc
        return self._normalize(value)

    async def set_value(self, key: str, value: str, ttl: int) -> None:
        try:
            await self.redis.set(key, value, ex=ttl)
        except RedisError as exc:
            logger.error("Redis SET failed: %s", exc)
            raise CacheBackendError("Cache is unavailable") from exc

    async def delete(self, key: str) -> None:
        try:
            await self.redis.delete(key)
        except RedisError as exc:
            logger.error("Redis DEL failed: %s", exc)
            raise CacheBackendError("Cache is unavailable") from exc
