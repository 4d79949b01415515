from datetime import datetime, timedelta
import hmac

from pydantic import ValidationError

from loggers import get_logger
from src.core.cache.interface import CacheBackendError, ExpiringCache
from src.core.schemas import Base
from src.core.utils.datetime_utils import get_utc_now
from src.core.utils.security import mask_login
from src.identity.exceptions import StoreUnavailable

logger = get_logger(__name__)

REFRESH_TOKEN_KEY_PREFIX = "RefreshToken"


class RefreshRecord(Base):
    login: str
    token: str
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or get_utc_now()) >= self.expires_at


class RefreshTokenStore:
    """
    Keeps the single currently-valid refresh token of every login.

    Records live in an expiring cache under ``"RefreshToken" + login``. Expiry
    is enforced twice: by the cache TTL and by ``expires_at`` at lookup time.
    Missing, expired or mismatched records are never an error; only backend
    failures surface, as ``StoreUnavailable``.
    """

    def __init__(self, cache: ExpiringCache) -> None:
        self.cache = cache

    @staticmethod
    def cache_key(login: str) -> str:
        return REFRESH_TOKEN_KEY_PREFIX + login

    async def put(self, login: str, token: str, ttl: int | timedelta) -> RefreshRecord:
        """Overwrite any record for ``login`` with one expiring ``ttl`` from now."""
        ttl_seconds = int(ttl.total_seconds()) if isinstance(ttl, timedelta) else ttl
        if ttl_seconds <= 0:
            raise ValueError("Refresh token ttl must be positive")

        record = RefreshRecord(
            login=login,
            token=token,
            expires_at=get_utc_now() + timedelta(seconds=ttl_seconds),
        )
        try:
            await self.cache.set_value(
                self.cache_key(login), record.model_dump_json(), ttl_seconds
            )
        except CacheBackendError as exc:
            raise StoreUnavailable() from exc
        return record

    async def get(self, login: str) -> RefreshRecord | None:
        try:
            raw = await self.cache.get_value(self.cache_key(login))
        except CacheBackendError as exc:
            raise StoreUnavailable() from exc
        if raw is None:
            return None

        try:
            record = RefreshRecord.model_validate_json(raw)
        except ValidationError:
            logger.warning(
                "Discarding unreadable refresh record for '%s'", mask_login(login)
            )
            return None

        if record.is_expired():
            return None
        return record

    async def is_valid(self, login: str, presented_token: str) -> bool:
        record = await self.get(login)
        if record is None:
            return False
        return hmac.compare_digest(
            record.token.encode("utf-8"), presented_token.encode("utf-8")
        )

    async def delete(self, login: str) -> None:
        try:
            await self.cache.delete(self.cache_key(login))
        except CacheBackendError as exc:
            raise StoreUnavailable() from exc
