from fastapi import Depends

from loggers import get_logger
from src.core.schemas import SuccessResponse
from src.core.utils.security import mask_login
from src.identity.dependencies import get_token_issuer
from src.identity.schemas import RefreshRequest
from src.identity.token_issuer import TokenIssuer

logger = get_logger(__name__)


class LogoutUseCase:
    """
    Use case for voluntarily ending a session.

    Unlike refresh, the presented token is fully verified with the refresh key,
    otherwise anyone could log any user out by forging the login claim.
    """

    def __init__(self, issuer: TokenIssuer) -> None:
        self.issuer = issuer

    async def execute(self, data: RefreshRequest) -> SuccessResponse:
        claims = self.issuer.verify_refresh(data.refresh_token)
        await self.issuer.end_session(claims.subject)
        logger.info("[Logout] User '%s' logged out.", mask_login(claims.subject))
        return SuccessResponse(success=True)


def get_logout_use_case(
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> LogoutUseCase:
    return LogoutUseCase(issuer=issuer)
