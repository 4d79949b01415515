from fastapi import Depends, Security
from fastapi.security.api_key import APIKeyHeader

from src.core.cache.dependencies import get_expiring_cache
from src.core.cache.interface import ExpiringCache
from src.identity.claims import ClaimSet
from src.identity.exceptions import InvalidSignature
from src.identity.identity_resolver import IdentityResolver
from src.identity.refresh_store import RefreshTokenStore
from src.identity.token_issuer import TokenIssuer
from src.main.config import config
from src.user.dependencies import get_user_lookup
from src.user.repositories import UserLookup

access_token_header = APIKeyHeader(
    name="Authorization", scheme_name="access-token", auto_error=False
)


def get_refresh_token_store(
    cache: ExpiringCache = Depends(get_expiring_cache),
) -> RefreshTokenStore:
    return RefreshTokenStore(cache=cache)


def get_token_issuer(
    store: RefreshTokenStore = Depends(get_refresh_token_store),
) -> TokenIssuer:
    return TokenIssuer.from_config(config.token, store)


def get_identity_resolver(
    users: UserLookup = Depends(get_user_lookup),
) -> IdentityResolver:
    return IdentityResolver(users=users)


def strip_bearer_prefix(token: str) -> str:
    if token.lower().startswith("bearer "):
        return token[7:].strip()
    return token.strip()


async def get_current_claims(
    token: str | None = Security(access_token_header),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> ClaimSet:
    """
    Get the claims of the caller from the access token.

    Args:
        token: The access token (with or without 'Bearer ' prefix)
        issuer: Token issuer holding the access key

    Returns:
        ClaimSet: Verified claims, ``sub`` holding the login

    Raises:
        InvalidSignature: If the header is missing or the token fails verification
    """
    if not token or not strip_bearer_prefix(token):
        raise InvalidSignature("Authentication token not found")
    return issuer.verify_access(strip_bearer_prefix(token))
