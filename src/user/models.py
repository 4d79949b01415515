from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from src.core.database.base import Base
from src.core.database.mixins import IntegerIDMixin, TimestampMixin


class User(Base, IntegerIDMixin, TimestampMixin):
    __tablename__ = "users"

    login: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    # Stored as sent by the client; no hashing scheme is applied yet.
    password: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))

    def __repr__(self) -> str:
        return f"<User(id={self.id}, login={self.login!r})>"
