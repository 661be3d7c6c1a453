from uuid import uuid4

import pytest

from src.app.use_cases.roles import (
    AuditContext,
    CreateRoleCommand,
    CreateRoleUseCase,
    DeleteRoleUseCase,
    UpdateRoleCommand,
    UpdateRoleUseCase,
)
from src.domain.entities import Role


@pytest.fixture
def context():
    return AuditContext(actor_id=uuid4(), ip_address="10.0.0.9", user_agent="pytest")


@pytest.mark.asyncio
async def test_create_default_role_clears_previous_default(mock_uow, context):
    # Arrange
    mock_uow.roles.get_by_name.return_value = None
    mock_uow.roles.create.side_effect = lambda role: role

    # Act
    result = await CreateRoleUseCase(mock_uow).execute(
        CreateRoleCommand(name="R2", is_default=True), context
    )

    # Assert
    assert result.is_ok()
    assert result.value.is_default is True
    mock_uow.roles.clear_default.assert_awaited_once_with()
    entry = mock_uow.audit_logs.create.call_args.args[0]
    assert entry.action == "ROLE_CREATED"
    assert entry.user_id == context.actor_id
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_create_non_default_role_keeps_existing_default(mock_uow, context):
    mock_uow.roles.get_by_name.return_value = None
    mock_uow.roles.create.side_effect = lambda role: role

    await CreateRoleUseCase(mock_uow).execute(CreateRoleCommand(name="R3"), context)

    mock_uow.roles.clear_default.assert_not_awaited()


@pytest.mark.asyncio
async def test_create_role_duplicate_name(mock_uow, context):
    mock_uow.roles.get_by_name.return_value = Role(id=uuid4(), name="ADMIN")

    result = await CreateRoleUseCase(mock_uow).execute(
        CreateRoleCommand(name="ADMIN"), context
    )

    assert result.error.code == "ROLE_ALREADY_EXISTS"
    mock_uow.roles.create.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_role_flip_to_default(mock_uow, context):
    role = Role(id=uuid4(), name="INVESTOR", is_default=False)
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.roles.update.side_effect = lambda r: r
    mock_uow.permissions.get_role_permission_names.return_value = ["VIEW_PORTFOLIO"]

    result = await UpdateRoleUseCase(mock_uow).execute(
        role.id, UpdateRoleCommand(is_default=True), context
    )

    assert result.is_ok()
    assert result.value.is_default is True
    assert result.value.permissions == ["VIEW_PORTFOLIO"]
    mock_uow.roles.clear_default.assert_awaited_once_with(except_role_id=role.id)


@pytest.mark.asyncio
async def test_update_role_rename_conflict(mock_uow, context):
    role = Role(id=uuid4(), name="INVESTOR")
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.roles.get_by_name.return_value = Role(id=uuid4(), name="ADMIN")

    result = await UpdateRoleUseCase(mock_uow).execute(
        role.id, UpdateRoleCommand(name="ADMIN"), context
    )

    assert result.error.code == "ROLE_ALREADY_EXISTS"
    mock_uow.roles.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_missing_role(mock_uow, context):
    mock_uow.roles.get_by_id.return_value = None

    result = await UpdateRoleUseCase(mock_uow).execute(
        uuid4(), UpdateRoleCommand(description="x"), context
    )

    assert result.error.code == "ROLE_NOT_FOUND"


@pytest.mark.asyncio
async def test_delete_role_soft_deactivates(mock_uow, context):
    role = Role(id=uuid4(), name="TEMP", is_active=True, is_default=False)
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.roles.count_active_holders.return_value = 0

    result = await DeleteRoleUseCase(mock_uow).execute(role.id, context)

    assert result.is_ok()
    assert role.is_active is False
    mock_uow.roles.update.assert_awaited_once_with(role)
    assert mock_uow.audit_logs.create.call_args.args[0].action == "ROLE_DELETED"


@pytest.mark.asyncio
async def test_delete_default_role_refused(mock_uow, context):
    role = Role(id=uuid4(), name="USER", is_active=True, is_default=True)
    mock_uow.roles.get_by_id.return_value = role

    result = await DeleteRoleUseCase(mock_uow).execute(role.id, context)

    assert result.error.code == "DEFAULT_ROLE_UNDELETABLE"
    assert role.is_active is True


@pytest.mark.asyncio
async def test_delete_role_with_holders_refused(mock_uow, context):
    role = Role(id=uuid4(), name="INVESTOR", is_active=True, is_default=False)
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.roles.count_active_holders.return_value = 2

    result = await DeleteRoleUseCase(mock_uow).execute(role.id, context)

    assert result.error.code == "ROLE_IN_USE"
    mock_uow.roles.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_cannot_deactivate_default_role(mock_uow, context):
    role = Role(id=uuid4(), name="R", is_active=True, is_default=True)
    mock_uow.roles.get_by_id.return_value = role

    result = await UpdateRoleUseCase(mock_uow).execute(
        role.id, UpdateRoleCommand(is_active=False), context
    )

    assert result.error.code == "DEFAULT_ROLE_UNDELETABLE"
    assert role.is_active is True
    mock_uow.roles.update.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_cannot_make_inactive_role_default(mock_uow, context):
    role = Role(id=uuid4(), name="OLD", is_active=False, is_default=False)
    mock_uow.roles.get_by_id.return_value = role

    result = await UpdateRoleUseCase(mock_uow).execute(
        role.id, UpdateRoleCommand(is_default=True), context
    )

    assert result.error.code == "DEFAULT_ROLE_UNDELETABLE"
    mock_uow.roles.clear_default.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_cannot_deactivate_held_role(mock_uow, context):
    role = Role(id=uuid4(), name="INVESTOR", is_active=True, is_default=False)
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.roles.count_active_holders.return_value = 3

    result = await UpdateRoleUseCase(mock_uow).execute(
        role.id, UpdateRoleCommand(is_active=False), context
    )

    assert result.error.code == "ROLE_IN_USE"
    mock_uow.roles.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_deactivates_unused_role(mock_uow, context):
    role = Role(id=uuid4(), name="TEMP", is_active=True, is_default=False)
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.roles.count_active_holders.return_value = 0
    mock_uow.roles.update.side_effect = lambda r: r
    mock_uow.permissions.get_role_permission_names.return_value = []

    result = await UpdateRoleUseCase(mock_uow).execute(
        role.id, UpdateRoleCommand(is_active=False), context
    )

    assert result.is_ok()
    assert result.value.is_active is False
