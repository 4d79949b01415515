from datetime import timedelta
import json

import pytest

from src.core.cache.memory_backend import MemoryExpiringCache
from src.core.cache.redis_backend import RedisExpiringCache
from src.core.utils.datetime_utils import get_utc_now
from src.identity.exceptions import StoreUnavailable
from src.identity.refresh_store import RefreshRecord, RefreshTokenStore
from tests.fakes.redis import InMemoryRedis, UnavailableRedis


def test_cache_key_is_prefixed_login() -> None:
    assert RefreshTokenStore.cache_key("alice") == "RefreshTokenalice"


@pytest.mark.asyncio
async def test_put_then_get_returns_record(refresh_store: RefreshTokenStore) -> None:
    record = await refresh_store.put("alice", "rt-1", timedelta(hours=1))

    stored = await refresh_store.get("alice")

    assert stored == record
    assert stored is not None
    assert stored.token == "rt-1"


@pytest.mark.asyncio
async def test_put_overwrites_previous_token(refresh_store: RefreshTokenStore) -> None:
    await refresh_store.put("alice", "rt-1", 60)
    await refresh_store.put("alice", "rt-2", 60)

    assert await refresh_store.is_valid("alice", "rt-2") is True
    assert await refresh_store.is_valid("alice", "rt-1") is False


@pytest.mark.asyncio
@pytest.mark.parametrize("ttl", [0, -5, timedelta(seconds=0)])
async def test_put_rejects_non_positive_ttl(
    refresh_store: RefreshTokenStore, ttl: int | timedelta
) -> None:
    with pytest.raises(ValueError):
        await refresh_store.put("alice", "rt-1", ttl)


@pytest.mark.asyncio
async def test_is_valid_false_for_unknown_login(
    refresh_store: RefreshTokenStore,
) -> None:
    assert await refresh_store.is_valid("nobody", "rt-1") is False


@pytest.mark.asyncio
async def test_records_are_isolated_per_login(
    refresh_store: RefreshTokenStore,
) -> None:
    await refresh_store.put("alice", "rt-alice", 60)
    await refresh_store.put("bob", "rt-bob", 60)

    assert await refresh_store.is_valid("alice", "rt-bob") is False
    assert await refresh_store.is_valid("bob", "rt-bob") is True


@pytest.mark.asyncio
async def test_delete_twice_is_harmless(refresh_store: RefreshTokenStore) -> None:
    await refresh_store.put("alice", "rt-1", 60)

    await refresh_store.delete("alice")
    await refresh_store.delete("alice")

    assert await refresh_store.get("alice") is None


@pytest.mark.asyncio
async def test_get_ignores_record_past_its_expiry(
    memory_cache: MemoryExpiringCache, refresh_store: RefreshTokenStore
) -> None:
    # cache entry still alive, record itself already expired
    stale = RefreshRecord(
        login="alice", token="rt-1", expires_at=get_utc_now() - timedelta(seconds=1)
    )
    await memory_cache.set_value(
        RefreshTokenStore.cache_key("alice"), stale.model_dump_json(), 60
    )

    assert await refresh_store.get("alice") is None
    assert await refresh_store.is_valid("alice", "rt-1") is False


@pytest.mark.asyncio
async def test_get_discards_unreadable_record(
    memory_cache: MemoryExpiringCache, refresh_store: RefreshTokenStore
) -> None:
    await memory_cache.set_value(
        RefreshTokenStore.cache_key("alice"), json.dumps({"token": 1}), 60
    )

    assert await refresh_store.get("alice") is None


@pytest.mark.asyncio
async def test_store_works_on_redis_backend() -> None:
    redis = InMemoryRedis()
    store = RefreshTokenStore(RedisExpiringCache(redis))  # type: ignore[arg-type]

    await store.put("alice", "rt-1", timedelta(days=1))

    assert await store.is_valid("alice", "rt-1") is True
    assert 0 < await redis.ttl("RefreshTokenalice") <= 86400


@pytest.mark.asyncio
async def test_backend_failure_surfaces_as_store_unavailable() -> None:
    cache = RedisExpiringCache(UnavailableRedis())  # type: ignore[arg-type]
    store = RefreshTokenStore(cache)

    with pytest.raises(StoreUnavailable):
        await store.put("alice", "rt-1", 60)
    with pytest.raises(StoreUnavailable):
        await store.get("alice")
    with pytest.raises(StoreUnavailable):
        await store.delete("alice")
