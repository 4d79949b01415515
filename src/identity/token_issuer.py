from dataclasses import dataclass
from datetime import datetime, timedelta

from loggers import get_logger
from src.core.utils.datetime_utils import get_utc_now
from src.core.utils.security import mask_login
from src.identity.claims import ClaimSet, TokenPair
from src.identity.refresh_store import RefreshTokenStore
from src.identity.signer import Signer
from src.main.config import MIN_SIGNING_KEY_LENGTH, TokenConfig

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SigningMaterial:
    """Independent symmetric keys for access and refresh tokens."""

    access_key: str
    refresh_key: str

    def __post_init__(self) -> None:
        for name, key in (("access", self.access_key), ("refresh", self.refresh_key)):
            if len(key) < MIN_SIGNING_KEY_LENGTH:
                raise ValueError(
                    f"The {name} key must be at least {MIN_SIGNING_KEY_LENGTH} characters"
                )
        if self.access_key == self.refresh_key:
            raise ValueError("Access and refresh keys must differ")


class TokenIssuer:
    """
    Mints access/refresh pairs and keeps the refresh store in step with them.

    Session changes are delete-then-put, which is not atomic: two refreshes
    racing for the same login can leave either caller's token on record.
    """

    def __init__(
        self,
        signer: Signer,
        store: RefreshTokenStore,
        keys: SigningMaterial,
        access_lifetime: timedelta,
        refresh_lifetime: timedelta,
    ) -> None:
        self.signer = signer
        self.store = store
        self.keys = keys
        self.access_lifetime = access_lifetime
        self.refresh_lifetime = refresh_lifetime

    @classmethod
    def from_config(
        cls, token_config: TokenConfig, store: RefreshTokenStore
    ) -> "TokenIssuer":
        return cls(
            signer=Signer(token_config.TOKEN_ISSUER, token_config.TOKEN_AUDIENCE),
            store=store,
            keys=SigningMaterial(
                access_key=token_config.TOKEN_ACCESS_KEY,
                refresh_key=token_config.TOKEN_REFRESH_KEY,
            ),
            access_lifetime=timedelta(
                seconds=token_config.TOKEN_ACCESS_LIFETIME_SECONDS
            ),
            refresh_lifetime=timedelta(
                seconds=token_config.TOKEN_REFRESH_LIFETIME_SECONDS
            ),
        )

    def mint_pair(self, claims: ClaimSet, now: datetime | None = None) -> TokenPair:
        """
        Sign a fresh access token and refresh token for ``claims``.

        Nothing is persisted; pair it with ``record_new_session`` or
        ``rotate_session``.
        """
        issued_at = now or get_utc_now()
        access_expires_at = issued_at + self.access_lifetime
        refresh_expires_at = issued_at + self.refresh_lifetime

        access_token = self.signer.issue(
            claims, issued_at, access_expires_at, self.keys.access_key
        )
        refresh_token = self.signer.issue(
            claims, issued_at, refresh_expires_at, self.keys.refresh_key
        )
        return TokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            access_expires_at=access_expires_at,
        )

    async def record_new_session(self, login: str, refresh_token: str) -> None:
        await self._replace_session(login, refresh_token)
        logger.debug("[TokenIssuer] Session recorded for '%s'", mask_login(login))

    async def rotate_session(self, login: str, new_refresh_token: str) -> None:
        await self._replace_session(login, new_refresh_token)
        logger.debug("[TokenIssuer] Session rotated for '%s'", mask_login(login))

    async def end_session(self, login: str) -> None:
        await self.store.delete(login)
        logger.debug("[TokenIssuer] Session ended for '%s'", mask_login(login))

    async def is_valid(self, login: str, refresh_token: str) -> bool:
        return await self.store.is_valid(login, refresh_token)

    def verify_access(self, token: str) -> ClaimSet:
        return self.signer.verify(token, self.keys.access_key)

    def verify_refresh(self, token: str) -> ClaimSet:
        return self.signer.verify(token, self.keys.refresh_key)

    async def _replace_session(self, login: str, refresh_token: str) -> None:
        # delete first so a failed put leaves no stale token behind
        await self.store.delete(login)
        await self.store.put(login, refresh_token, self.refresh_lifetime)
