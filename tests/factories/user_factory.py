from __future__ import annotations

from src.user.models import User
from src.user.repositories import UserRecord


def build_user_record(
    login: str = "alice",
    password: str = "hunter12",
    email: str | None = None,
) -> UserRecord:
    return UserRecord(
        login=login, password=password, email=email or f"{login}@example.com"
    )


def build_user(
    login: str = "alice@example.com",
    password: str = "hunter12",
    user_id: int = 1,
) -> User:
    return User(id=user_id, login=login, password=password, email=login)
