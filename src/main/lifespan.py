from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from loggers import get_logger
from src.core.cache.lifecycle import on_cache_shutdown, on_cache_startup
from src.core.database.engine import engine
from src.main.config import config
from src.main.sentry import init_sentry

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    init_sentry()
    await on_cache_startup(
        app,
        backend=config.token.REFRESH_STORE_BACKEND,
        connection_url=config.redis.dsn,
    )
    logger.info(
        "Refresh store backend: %s", app.state.expiring_cache.backend_name
    )

    yield

    await on_cache_shutdown(app)
    await engine.dispose()
