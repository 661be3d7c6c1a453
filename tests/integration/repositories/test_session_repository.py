from datetime import timedelta

import pytest
import pytest_asyncio
from sqlmodel import select

from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.auth import CleanupSessionsUseCase
from src.domain.base import utcnow
from src.domain.entities import Session, User


@pytest_asyncio.fixture
async def user(db_session):
    user = User(email="investor@fund.com", password_hash="x" * 60)
    db_session.add(user)
    await db_session.commit()
    return user


def make_session(user, token, expires_in=timedelta(days=7), is_revoked=False):
    return Session(
        user_id=user.id,
        refresh_token_hash=Session.hash_token(token),
        expires_at=utcnow() + expires_in,
        is_revoked=is_revoked,
    )


@pytest.mark.asyncio
async def test_token_stored_as_digest(db_session, user):
    repo = SessionRepository(db_session)
    await repo.create(make_session(user, "raw-refresh-token"))
    await db_session.commit()

    stored = (await db_session.exec(select(Session))).one()

    assert stored.refresh_token_hash != "raw-refresh-token"
    assert len(stored.refresh_token_hash) == 64
    assert (await repo.get_live("raw-refresh-token")).id == stored.id


@pytest.mark.asyncio
async def test_revoke_only_wins_once(db_session, user):
    repo = SessionRepository(db_session)
    await repo.create(make_session(user, "token-1"))
    await db_session.commit()

    first = await repo.revoke("token-1")
    second = await repo.revoke("token-1")

    assert first is True
    assert second is False
    assert await repo.get_live("token-1") is None


@pytest.mark.asyncio
async def test_revoke_unknown_token(db_session, user):
    repo = SessionRepository(db_session)

    assert await repo.revoke("never-issued") is False


@pytest.mark.asyncio
async def test_expired_session_is_not_live(db_session, user):
    repo = SessionRepository(db_session)
    await repo.create(make_session(user, "old", expires_in=timedelta(seconds=-1)))
    await db_session.commit()

    assert await repo.get_live("old") is None
    assert await repo.touch_activity("old", user_agent="curl") is False


@pytest.mark.asyncio
async def test_revoke_all_counts_only_unrevoked(db_session, user):
    repo = SessionRepository(db_session)
    await repo.create(make_session(user, "a"))
    await repo.create(make_session(user, "b"))
    await repo.create(make_session(user, "c", is_revoked=True))
    await db_session.commit()

    assert await repo.revoke_all_by_user_id(user.id) == 2
    assert await repo.revoke_all_by_user_id(user.id) == 0


@pytest.mark.asyncio
async def test_cleanup_removes_only_dead_sessions(db_session, user):
    repo = SessionRepository(db_session)
    await repo.create(make_session(user, "live"))
    await repo.create(make_session(user, "expired", expires_in=timedelta(seconds=-1)))
    await repo.create(make_session(user, "revoked", is_revoked=True))
    await db_session.commit()

    deleted = await CleanupSessionsUseCase(SqlAlchemyUnitOfWork(db_session)).execute()

    remaining = (await db_session.exec(select(Session))).all()
    assert deleted == 2
    assert [s.refresh_token_hash for s in remaining] == [Session.hash_token("live")]


@pytest.mark.asyncio
async def test_touch_activity_updates_metadata(db_session, user):
    repo = SessionRepository(db_session)
    await repo.create(make_session(user, "live"))
    await db_session.commit()

    touched = await repo.touch_activity("live", user_agent="Firefox", ip_address="10.0.0.2")
    await db_session.commit()
    db_session.expire_all()
    stored = await repo.get_live("live")

    assert touched is True
    assert stored.user_agent == "Firefox"
    assert stored.ip_address == "10.0.0.2"
