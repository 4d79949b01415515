from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from loggers import get_logger
from src.core.database.session import get_session
from src.core.schemas import SuccessResponse
from src.core.utils.security import mask_login
from src.user.exceptions import LoginAlreadyTaken
from src.user.repositories import UserRepository
from src.user.schemas import SignInRequest

logger = get_logger(__name__)


class SignInUseCase:
    """Use case for registering a new user. The e-mail doubles as the login."""

    def __init__(
        self, session: AsyncSession, repository: UserRepository | None = None
    ) -> None:
        self.session = session
        self.repository = repository or UserRepository()

    async def execute(self, data: SignInRequest) -> SuccessResponse:
        login = data.email
        if await self.repository.exists(self.session, login=login):
            logger.info("[SignIn] Login '%s' is already taken.", mask_login(login))
            raise LoginAlreadyTaken()

        await self.repository.create(
            self.session,
            data={"login": login, "password": data.password, "email": data.email},
            commit=True,
        )
        logger.info("[SignIn] User '%s' registered successfully.", mask_login(login))
        return SuccessResponse(success=True)


def get_sign_in_use_case(
    session: AsyncSession = Depends(get_session),
) -> SignInUseCase:
    return SignInUseCase(session=session)
