from fastapi import Depends

from loggers import get_logger
from src.core.utils.datetime_utils import get_utc_now
from src.core.utils.security import mask_login
from src.identity.dependencies import get_identity_resolver, get_token_issuer
from src.identity.exceptions import (
    RefreshTokenExpired,
    RefreshTokenMalformed,
    RefreshTokenMismatch,
)
from src.identity.identity_resolver import IdentityResolver
from src.identity.schemas import RefreshRequest, TokenResponse
from src.identity.signer import Signer
from src.identity.token_issuer import TokenIssuer

logger = get_logger(__name__)


class RefreshTokensUseCase:
    """
    Use case for exchanging a refresh token for a new pair (rotation).

    Checks run in a fixed order:

    1. The token is decoded without verification (unparseable -> malformed).
    2. Its ``exp`` is compared with now (past -> expired, no store access).
    3. The login claim must be present and still map to a user (else malformed).
    4. The token must equal the one on record for that login (else mismatch).

    The signature is not verified here; the store comparison in step 4 is what
    decides whether the presented token is trusted.
    """

    def __init__(self, resolver: IdentityResolver, issuer: TokenIssuer) -> None:
        self.resolver = resolver
        self.issuer = issuer

    async def execute(self, data: RefreshRequest) -> TokenResponse:
        decoded = Signer.decode_unverified(data.refresh_token)

        if get_utc_now() > decoded.expires_at:
            logger.warning("[RefreshTokens] Refresh token expired")
            raise RefreshTokenExpired()

        login = decoded.subject
        if login is None:
            logger.warning("[RefreshTokens] Refresh token carries no login claim")
            raise RefreshTokenMalformed()

        claims = await self.resolver.resolve_by_login(login)
        if claims is None:
            raise RefreshTokenMalformed()

        if not await self.issuer.is_valid(login, data.refresh_token):
            logger.warning(
                "[RefreshTokens] Refresh token for '%s' is not the one on record",
                mask_login(login),
            )
            raise RefreshTokenMismatch()

        pair = self.issuer.mint_pair(claims)
        await self.issuer.rotate_session(login, pair.refresh_token)

        logger.info("[RefreshTokens] Tokens rotated for '%s'.", mask_login(login))
        return TokenResponse.from_pair(pair)


def get_refresh_tokens_use_case(
    resolver: IdentityResolver = Depends(get_identity_resolver),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> RefreshTokensUseCase:
    return RefreshTokensUseCase(resolver=resolver, issuer=issuer)
