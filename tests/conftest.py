from collections.abc import AsyncGenerator, Generator
import os

os.environ.setdefault("TESTING", "true")

from fastapi import FastAPI  # noqa: E402
import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from src.core.cache.dependencies import get_expiring_cache  # noqa: E402
from src.core.cache.memory_backend import MemoryExpiringCache  # noqa: E402
from src.identity.refresh_store import RefreshTokenStore  # noqa: E402
from src.identity.token_issuer import TokenIssuer  # noqa: E402
from src.main.config import Config, config, get_settings  # noqa: E402
from src.main.web import get_application  # noqa: E402
from src.user.dependencies import get_user_lookup  # noqa: E402
from tests.factories.token_factory import build_issuer  # noqa: E402
from tests.factories.user_factory import build_user_record  # noqa: E402
from tests.fakes.redis import InMemoryRedis  # noqa: E402
from tests.fakes.users import InMemoryUserLookup  # noqa: E402
from tests.helpers.overrides import DependencyOverrides  # noqa: E402
from tests.helpers.providers import ProvideValue  # noqa: E402


@pytest.fixture(scope="session")
def settings() -> Config:
    return get_settings()


@pytest.fixture
def app() -> FastAPI:
    return get_application()


@pytest.fixture
def dependency_overrides(app: FastAPI) -> Generator[DependencyOverrides]:
    overrides = DependencyOverrides(app)
    yield overrides
    overrides.reset()


@pytest.fixture
def fake_redis() -> InMemoryRedis:
    return InMemoryRedis()


@pytest.fixture
def memory_cache() -> MemoryExpiringCache:
    return MemoryExpiringCache()


@pytest.fixture
def refresh_store(memory_cache: MemoryExpiringCache) -> RefreshTokenStore:
    return RefreshTokenStore(cache=memory_cache)


@pytest.fixture
def token_issuer(refresh_store: RefreshTokenStore) -> TokenIssuer:
    return build_issuer(refresh_store)


@pytest.fixture
def fake_users() -> InMemoryUserLookup:
    return InMemoryUserLookup(build_user_record("alice", "hunter12"))


@pytest.fixture
def config_issuer(refresh_store: RefreshTokenStore) -> TokenIssuer:
    """Issuer with the same keys the application uses."""
    return TokenIssuer.from_config(config.token, refresh_store)


@pytest.fixture
def app_with_fakes(
    app: FastAPI,
    dependency_overrides: DependencyOverrides,
    memory_cache: MemoryExpiringCache,
    fake_users: InMemoryUserLookup,
) -> FastAPI:
    dependency_overrides.set(get_expiring_cache, ProvideValue(memory_cache))
    dependency_overrides.set(get_user_lookup, ProvideValue(fake_users))
    return app


@pytest_asyncio.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver"
    ) as client:
        yield client


@pytest_asyncio.fixture
async def async_client_with_fakes(
    app_with_fakes: FastAPI,
) -> AsyncGenerator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app_with_fakes)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver"
    ) as client:
        yield client
