from uuid import uuid4

import pytest

from src.app.use_cases.auth import ValidatePrincipalUseCase
from src.domain.entities import User


@pytest.mark.asyncio
async def test_active_user_resolves_to_principal(mock_uow):
    user = User(id=uuid4(), email="a@fund.com", password_hash="x", is_active=True)
    mock_uow.users.get_active_by_id.return_value = user
    mock_uow.user_roles.get_active_grants.return_value = [
        ("ADMIN", "CREATE_USER"),
        ("USER", "VIEW_DASHBOARD"),
    ]

    principal = await ValidatePrincipalUseCase(mock_uow).execute(user.id)

    assert principal.id == user.id
    assert principal.roles == frozenset({"ADMIN", "USER"})
    assert principal.permissions == frozenset({"CREATE_USER", "VIEW_DASHBOARD"})


@pytest.mark.asyncio
async def test_missing_or_inactive_user_is_none(mock_uow):
    mock_uow.users.get_active_by_id.return_value = None

    principal = await ValidatePrincipalUseCase(mock_uow).execute(uuid4())

    assert principal is None
    mock_uow.user_roles.get_active_grants.assert_not_awaited()
