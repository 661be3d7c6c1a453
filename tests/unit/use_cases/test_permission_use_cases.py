from uuid import uuid4

import pytest

from src.app.use_cases.permissions import (
    AssignPermissionToRoleUseCase,
    BulkAssignPermissionsCommand,
    BulkAssignPermissionsUseCase,
    CheckPermissionUseCase,
    CreatePermissionCommand,
    CreatePermissionUseCase,
    DeletePermissionUseCase,
    GetRolePermissionsUseCase,
    RevokePermissionFromRoleUseCase,
    RolePermissionCommand,
    UpdatePermissionCommand,
    UpdatePermissionUseCase,
)
from src.app.use_cases.roles import AuditContext
from src.domain.entities import Permission, Role, RolePermission, User


@pytest.fixture
def context():
    return AuditContext(actor_id=uuid4())


@pytest.fixture
def role():
    return Role(id=uuid4(), name="ADMIN", is_active=True)


@pytest.fixture
def permission():
    return Permission(id=uuid4(), name="CREATE_USER", resource="USER", action="CREATE")


@pytest.mark.asyncio
async def test_create_permission(mock_uow, context):
    mock_uow.permissions.get_by_name.return_value = None
    mock_uow.permissions.create.side_effect = lambda p: p

    result = await CreatePermissionUseCase(mock_uow).execute(
        CreatePermissionCommand(name="EXPORT_REPORT", resource="REPORT", action="EXPORT"),
        context,
    )

    assert result.is_ok()
    assert result.value.name == "EXPORT_REPORT"
    assert mock_uow.audit_logs.create.call_args.args[0].action == "PERMISSION_CREATED"


@pytest.mark.asyncio
async def test_create_permission_duplicate(mock_uow, context, permission):
    mock_uow.permissions.get_by_name.return_value = permission

    result = await CreatePermissionUseCase(mock_uow).execute(
        CreatePermissionCommand(name="CREATE_USER"), context
    )

    assert result.error.code == "PERMISSION_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_assign_permission_creates_grant(mock_uow, context, role, permission):
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.permissions.get_by_id.return_value = permission
    mock_uow.permissions.get_grant.return_value = None

    result = await AssignPermissionToRoleUseCase(mock_uow).execute(
        RolePermissionCommand(role_id=role.id, permission_id=permission.id), context
    )

    assert result.is_ok()
    grant = mock_uow.permissions.save_grant.call_args.args[0]
    assert grant.role_id == role.id
    assert grant.permission_id == permission.id
    entry = mock_uow.audit_logs.create.call_args.args[0]
    assert entry.action == "PERMISSION_ASSIGNED"
    assert entry.details["permission_name"] == "CREATE_USER"


@pytest.mark.asyncio
async def test_assign_permission_already_granted(mock_uow, context, role, permission):
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.permissions.get_by_id.return_value = permission
    mock_uow.permissions.get_grant.return_value = RolePermission(
        role_id=role.id, permission_id=permission.id, is_active=True
    )

    result = await AssignPermissionToRoleUseCase(mock_uow).execute(
        RolePermissionCommand(role_id=role.id, permission_id=permission.id), context
    )

    assert result.error.code == "PERMISSION_ALREADY_GRANTED"


@pytest.mark.asyncio
async def test_assign_missing_permission(mock_uow, context, role):
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.permissions.get_by_id.return_value = None

    result = await AssignPermissionToRoleUseCase(mock_uow).execute(
        RolePermissionCommand(role_id=role.id, permission_id=uuid4()), context
    )

    assert result.error.code == "PERMISSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_revoke_permission_soft_deactivates(mock_uow, context, role, permission):
    grant = RolePermission(role_id=role.id, permission_id=permission.id, is_active=True)
    mock_uow.permissions.get_grant.return_value = grant

    result = await RevokePermissionFromRoleUseCase(mock_uow).execute(
        RolePermissionCommand(role_id=role.id, permission_id=permission.id), context
    )

    assert result.is_ok()
    assert grant.is_active is False
    assert mock_uow.audit_logs.create.call_args.args[0].action == "PERMISSION_REVOKED"


@pytest.mark.asyncio
async def test_revoke_permission_not_granted(mock_uow, context, role, permission):
    mock_uow.permissions.get_grant.return_value = None

    result = await RevokePermissionFromRoleUseCase(mock_uow).execute(
        RolePermissionCommand(role_id=role.id, permission_id=permission.id), context
    )

    assert result.error.code == "PERMISSION_NOT_GRANTED"


@pytest.mark.asyncio
async def test_delete_permission_refused_while_granted(mock_uow, context, permission):
    mock_uow.permissions.get_by_id.return_value = permission
    mock_uow.permissions.count_active_grants.return_value = 2

    result = await DeletePermissionUseCase(mock_uow).execute(permission.id, context)

    assert result.error.code == "PERMISSION_IN_USE"
    assert permission.is_active is True
    mock_uow.permissions.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete_permission_soft_deactivates(mock_uow, context, permission):
    mock_uow.permissions.get_by_id.return_value = permission
    mock_uow.permissions.count_active_grants.return_value = 0

    result = await DeletePermissionUseCase(mock_uow).execute(permission.id, context)

    assert result.is_ok()
    assert permission.is_active is False
    mock_uow.permissions.update.assert_awaited_once_with(permission)
    assert mock_uow.audit_logs.create.call_args.args[0].action == "PERMISSION_DELETED"
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_delete_missing_permission(mock_uow, context):
    mock_uow.permissions.get_by_id.return_value = None

    result = await DeletePermissionUseCase(mock_uow).execute(uuid4(), context)

    assert result.error.code == "PERMISSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_update_permission_fields(mock_uow, context, permission):
    mock_uow.permissions.get_by_id.return_value = permission
    mock_uow.permissions.update.side_effect = lambda p: p

    result = await UpdatePermissionUseCase(mock_uow).execute(
        permission.id, UpdatePermissionCommand(description="Create investor accounts"), context
    )

    assert result.is_ok()
    assert result.value.description == "Create investor accounts"
    assert result.value.name == "CREATE_USER"
    entry = mock_uow.audit_logs.create.call_args.args[0]
    assert entry.action == "PERMISSION_UPDATED"
    assert entry.details["changes"] == {"description": "Create investor accounts"}


@pytest.mark.asyncio
async def test_update_permission_rename_conflict(mock_uow, context, permission):
    mock_uow.permissions.get_by_id.return_value = permission
    mock_uow.permissions.get_by_name.return_value = Permission(id=uuid4(), name="VIEW_USER")

    result = await UpdatePermissionUseCase(mock_uow).execute(
        permission.id, UpdatePermissionCommand(name="VIEW_USER"), context
    )

    assert result.error.code == "PERMISSION_ALREADY_EXISTS"
    mock_uow.permissions.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_cannot_deactivate_granted_permission(mock_uow, context, permission):
    mock_uow.permissions.get_by_id.return_value = permission
    mock_uow.permissions.count_active_grants.return_value = 1

    result = await UpdatePermissionUseCase(mock_uow).execute(
        permission.id, UpdatePermissionCommand(is_active=False), context
    )

    assert result.error.code == "PERMISSION_IN_USE"
    assert permission.is_active is True


@pytest.mark.asyncio
async def test_role_permissions(mock_uow, role, permission):
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.permissions.list_role_permissions.return_value = [permission]

    result = await GetRolePermissionsUseCase(mock_uow).execute(role.id)

    assert result.value.role_name == "ADMIN"
    assert [p.name for p in result.value.permissions] == ["CREATE_USER"]


@pytest.mark.asyncio
async def test_role_permissions_missing_role(mock_uow):
    mock_uow.roles.get_by_id.return_value = None

    result = await GetRolePermissionsUseCase(mock_uow).execute(uuid4())

    assert result.error.code == "ROLE_NOT_FOUND"


@pytest.mark.asyncio
async def test_bulk_assign_permissions_partial_failure(mock_uow, context, role, permission):
    missing_id = uuid4()
    mock_uow.roles.get_by_id.return_value = role
    mock_uow.permissions.get_by_id.side_effect = (
        lambda permission_id: permission if permission_id == permission.id else None
    )
    mock_uow.permissions.get_grant.return_value = None

    result = await BulkAssignPermissionsUseCase(mock_uow).execute(
        BulkAssignPermissionsCommand(
            role_id=role.id, permission_ids=[permission.id, missing_id]
        ),
        context,
    )

    assert result.value.success_count == 1
    assert [(f.permission_id, f.error) for f in result.value.failures] == [
        (str(missing_id), "Permission not found or inactive")
    ]


@pytest.mark.asyncio
async def test_bulk_assign_permissions_inactive_role(mock_uow, context, permission):
    mock_uow.roles.get_by_id.return_value = Role(id=uuid4(), name="OLD", is_active=False)

    result = await BulkAssignPermissionsUseCase(mock_uow).execute(
        BulkAssignPermissionsCommand(role_id=uuid4(), permission_ids=[permission.id]),
        context,
    )

    assert result.error.code == "ROLE_NOT_FOUND"
    mock_uow.permissions.save_grant.assert_not_awaited()


@pytest.mark.asyncio
async def test_check_permission_names_granting_roles(mock_uow):
    user = User(id=uuid4(), email="investor@fund.com", password_hash="x")
    mock_uow.users.get_by_id.return_value = user
    mock_uow.user_roles.get_active_grants.return_value = [
        ("INVESTOR", "VIEW_PORTFOLIO"),
        ("USER", "VIEW_PORTFOLIO"),
        ("USER", "VIEW_USER_DASHBOARD"),
    ]

    result = await CheckPermissionUseCase(mock_uow).execute(user.id, "VIEW_PORTFOLIO")

    assert result.value.has_permission is True
    assert result.value.granted_by_roles == ["INVESTOR", "USER"]


@pytest.mark.asyncio
async def test_check_permission_inactive_user_holds_nothing(mock_uow):
    user = User(id=uuid4(), email="gone@fund.com", password_hash="x", is_active=False)
    mock_uow.users.get_by_id.return_value = user

    result = await CheckPermissionUseCase(mock_uow).execute(user.id, "VIEW_PORTFOLIO")

    assert result.value.has_permission is False
    mock_uow.user_roles.get_active_grants.assert_not_awaited()
