import pytest

from src.user.models import User
from src.user.repositories import RepositoryUserLookup, UserRecord, UserRepository
from tests.factories.user_factory import build_user
from tests.fakes.db import FakeAsyncSession


@pytest.mark.asyncio
async def test_find_by_login_returns_record() -> None:
    session = FakeAsyncSession()
    session.returning(build_user(login="alice@example.com", password="hunter12"))
    lookup = RepositoryUserLookup(session=session)  # type: ignore[arg-type]

    record = await lookup.find_by_login("alice@example.com")

    assert record == UserRecord(
        login="alice@example.com", password="hunter12", email="alice@example.com"
    )
    session.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_find_by_login_returns_none_for_unknown_login() -> None:
    lookup = RepositoryUserLookup(session=FakeAsyncSession())  # type: ignore[arg-type]

    assert await lookup.find_by_login("nobody") is None


@pytest.mark.asyncio
async def test_repository_create_commits_when_asked() -> None:
    session = FakeAsyncSession()

    user = await UserRepository().create(
        session,  # type: ignore[arg-type]
        data={"login": "a@b.c", "password": "hunter12", "email": "a@b.c"},
        commit=True,
    )

    assert isinstance(user, User)
    session.add.assert_called_once_with(user)
    session.commit.assert_awaited_once()
    session.refresh.assert_awaited_once_with(user)


@pytest.mark.asyncio
async def test_repository_exists_uses_scalar() -> None:
    session = FakeAsyncSession()
    session.scalar.return_value = True

    exists = await UserRepository().exists(session, login="a@b.c")  # type: ignore[arg-type]

    assert exists is True
