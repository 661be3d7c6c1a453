from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.use_cases.auth import LogoutAllUseCase, LogoutUseCase
from src.domain.base import utcnow
from src.domain.entities import Session, User


def make_session(user_id):
    return Session(
        id=uuid4(),
        user_id=user_id,
        refresh_token_hash="0" * 64,
        expires_at=utcnow() + timedelta(days=1),
    )


@pytest.mark.asyncio
async def test_logout_revokes_live_session(mock_uow):
    user_id = uuid4()
    mock_uow.sessions.get_live.return_value = make_session(user_id)
    mock_uow.sessions.revoke.return_value = True

    result = await LogoutUseCase(mock_uow).execute("token", user_id=user_id)

    assert result.is_ok()
    mock_uow.sessions.revoke.assert_awaited_once_with("token")
    assert mock_uow.audit_logs.create.call_args.args[0].action == "LOGOUT"


@pytest.mark.asyncio
async def test_logout_unknown_token_is_success(mock_uow):
    mock_uow.sessions.get_live.return_value = None

    result = await LogoutUseCase(mock_uow).execute("unknown")

    assert result.is_ok()
    mock_uow.sessions.revoke.assert_not_awaited()
    mock_uow.audit_logs.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_logout_ignores_session_of_another_user(mock_uow):
    mock_uow.sessions.get_live.return_value = make_session(uuid4())

    result = await LogoutUseCase(mock_uow).execute("token", user_id=uuid4())

    assert result.is_ok()
    mock_uow.sessions.revoke.assert_not_awaited()


@pytest.mark.asyncio
async def test_logout_all_reports_revoked_count(mock_uow):
    user_id = uuid4()
    mock_uow.sessions.revoke_all_by_user_id.return_value = 3
    mock_uow.users.get_by_id.return_value = User(id=user_id, email="a@b.com", password_hash="x")

    result = await LogoutAllUseCase(mock_uow).execute(user_id)

    assert result.value.revoked_sessions == 3
    entry = mock_uow.audit_logs.create.call_args.args[0]
    assert entry.action == "LOGOUT_ALL"
    assert entry.details == {"revoked_sessions": 3}


@pytest.mark.asyncio
async def test_logout_all_unknown_user(mock_uow):
    mock_uow.sessions.revoke_all_by_user_id.return_value = 0
    mock_uow.users.get_by_id.return_value = None

    result = await LogoutAllUseCase(mock_uow).execute(uuid4())

    assert result.is_ok()
    assert result.value.revoked_sessions == 0
    mock_uow.audit_logs.create.assert_not_awaited()
