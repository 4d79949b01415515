from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from loggers import get_logger
from src.core.database.base import Base as SQLAlchemyBase

logger = get_logger(__name__)

T = TypeVar("T", bound=SQLAlchemyBase)


class BaseRepository(Generic[T]):
    """Base repository with common SQLAlchemy operations using caller-provided sessions."""

    model: type[T]

    def __init__(self) -> None:
        if not hasattr(self, "model"):
            raise NotImplementedError("Subclasses must define class variable 'model'")

    async def create(
        self, session: AsyncSession, data: dict[str, Any], commit: bool = False
    ) -> T:
        """Create a new record using the provided session."""
        try:
            instance = self.model(**data)
            session.add(instance)
            if commit:
                await session.commit()
                await session.refresh(instance)
                logger.info("%s created successfully [Committed].", self.model.__name__)
            else:
                logger.debug(
                    "%s created [Staged, pending commit].", self.model.__name__
                )
            return instance
        except SQLAlchemyError:
            if commit:
                await session.rollback()
            raise

    async def exists(self, session: AsyncSession, **filters: Any) -> bool:
        """Determine if a record matching the provided filters exists."""
        subquery = select(1).select_from(self.model).filter_by(**filters).limit(1)
        query = select(subquery.exists())
        return bool(await session.scalar(query))

    async def get_single(self, session: AsyncSession, **filters: Any) -> T | None:
        """Retrieve a single record using the provided session."""
        query = select(self.model).filter_by(**filters).limit(1)
        result = await session.execute(query)
        return result.scalars().first()
