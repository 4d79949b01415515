from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database.repositories import BaseRepository
from src.user.models import User


class UserRepository(BaseRepository[User]):

    model = User


@dataclass(frozen=True, slots=True)
class UserRecord:
    """Read-model of a user as seen by the identity layer."""

    login: str
    password: str
    email: str


class UserLookup(Protocol):
    async def find_by_login(self, login: str) -> UserRecord | None:
        """Return the user registered under ``login`` or None."""
        ...


class RepositoryUserLookup:
    """``UserLookup`` backed by the users table."""

    def __init__(
        self, session: AsyncSession, repository: UserRepository | None = None
    ) -> None:
        self.session = session
        self.repository = repository or UserRepository()

    async def find_by_login(self, login: str) -> UserRecord | None:
        user = await self.repository.get_single(self.session, login=login)
        if user is None:
            return None
        return UserRecord(login=user.login, password=user.password, email=user.email)
