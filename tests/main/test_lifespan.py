from __future__ import annotations

from unittest.mock import AsyncMock, Mock

from fastapi import FastAPI
import pytest

from src.core.cache.memory_backend import MemoryExpiringCache
from src.main import lifespan as lifespan_module
from src.main.config import config
from src.main.lifespan import lifespan


@pytest.mark.asyncio
async def test_lifespan_initializes_and_shutdowns(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    init_sentry = Mock()
    cache_shutdown = AsyncMock()
    engine = Mock(dispose=AsyncMock())

    async def cache_startup(app: FastAPI, backend: str, connection_url: str) -> None:
        app.state.expiring_cache = MemoryExpiringCache()

    startup_spy = AsyncMock(side_effect=cache_startup)
    monkeypatch.setattr(lifespan_module, "init_sentry", init_sentry)
    monkeypatch.setattr(lifespan_module, "on_cache_startup", startup_spy)
    monkeypatch.setattr(lifespan_module, "on_cache_shutdown", cache_shutdown)
    monkeypatch.setattr(lifespan_module, "engine", engine)

    app = FastAPI()
    async with lifespan(app):
        pass

    init_sentry.assert_called_once()
    startup_spy.assert_awaited_once_with(
        app,
        backend=config.token.REFRESH_STORE_BACKEND,
        connection_url=config.redis.dsn,
    )
    cache_shutdown.assert_awaited_once_with(app)
    engine.dispose.assert_awaited_once()
