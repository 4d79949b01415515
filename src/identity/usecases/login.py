from fastapi import Depends

from loggers import get_logger
from src.core.utils.security import mask_login
from src.identity.dependencies import get_identity_resolver, get_token_issuer
from src.identity.exceptions import CredentialsInvalid
from src.identity.identity_resolver import IdentityResolver
from src.identity.schemas import LoginRequest, TokenResponse
from src.identity.token_issuer import TokenIssuer

logger = get_logger(__name__)


class LoginUseCase:
    """Use case for exchanging login and password for a token pair."""

    def __init__(self, resolver: IdentityResolver, issuer: TokenIssuer) -> None:
        self.resolver = resolver
        self.issuer = issuer

    async def execute(self, data: LoginRequest) -> TokenResponse:
        claims = await self.resolver.resolve_by_credentials(data.login, data.password)
        if claims is None:
            raise CredentialsInvalid()

        pair = self.issuer.mint_pair(claims)
        await self.issuer.record_new_session(claims.subject, pair.refresh_token)

        logger.info("[Login] User '%s' logged in.", mask_login(claims.subject))
        return TokenResponse.from_pair(pair)


def get_login_use_case(
    resolver: IdentityResolver = Depends(get_identity_resolver),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> LoginUseCase:
    return LoginUseCase(resolver=resolver, issuer=issuer)
