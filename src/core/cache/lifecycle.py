from collections.abc import Awaitable
import logging
from typing import cast

from fastapi import FastAPI
from redis.asyncio import Redis

from src.core.cache.memory_backend import MemoryExpiringCache
from src.core.cache.redis_backend import RedisExpiringCache

logger = logging.getLogger("cache")


def create_redis_client(connection_url: str, *, decode_responses: bool = True) -> Redis:
    """
    Create a Redis async client from URL. Keeping construction here simplifies
    monkeypatching in tests and centralizes defaults.
    """
    client = Redis.from_url(connection_url, decode_responses=decode_responses)
    return cast(Redis, client)


async def on_cache_startup(app: FastAPI, backend: str, connection_url: str) -> None:
    """
    Build the expiring cache for the configured backend and attach it to app.state.

    For the redis backend the client is pinged once so a bad DSN fails startup
    instead of the first login.
    """
    if backend == "redis":
        redis_client = create_redis_client(connection_url=connection_url)
        ping_result = redis_client.ping()
        if isinstance(ping_result, Awaitable):
            ping_result = await ping_result
        if not ping_result:
            raise RuntimeError("Redis ping failed during startup")
        app.state.redis_client = redis_client
        app.state.expiring_cache = RedisExpiringCache(redis_client)
        logger.info("Redis-backed cache created successfully.")
    else:
        app.state.redis_client = None
        app.state.expiring_cache = MemoryExpiringCache()
        logger.info("In-memory cache created.")


async def on_cache_shutdown(app: FastAPI) -> None:
    redis_client = getattr(app.state, "redis_client", None)
    if redis_client:
        logger.info("Closing Redis client...")
        await redis_client.aclose()
        logger.info("Redis client closed.")
    app.state.redis_client = None
    app.state.expiring_cache = None
