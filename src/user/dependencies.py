from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.database.session import get_session
from src.user.repositories import RepositoryUserLookup, UserLookup


def get_user_lookup(session: AsyncSession = Depends(get_session)) -> UserLookup:
    return RepositoryUserLookup(session=session)
