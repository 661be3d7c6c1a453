from uuid import uuid4

import pytest

from src.app.use_cases.roles import SeedCatalogUseCase
from src.app.use_cases.roles.seed_catalog_use_case import PERMISSION_CATALOG, ROLE_CATALOG
from src.domain.entities import Permission, Role


def with_id(entity):
    entity.id = uuid4()
    return entity


@pytest.mark.asyncio
async def test_seed_empty_store(mock_uow):
    # Arrange
    mock_uow.permissions.get_by_name.return_value = None
    mock_uow.permissions.create.side_effect = with_id
    mock_uow.roles.get_by_name.return_value = None
    mock_uow.roles.get_default.return_value = None
    mock_uow.roles.create.side_effect = with_id
    mock_uow.permissions.get_grant.return_value = None

    # Act
    result = await SeedCatalogUseCase(mock_uow).execute()

    # Assert
    expected_grants = sum(len(granted) for _, _, granted in ROLE_CATALOG.values())
    assert result.value.permissions_created == len(PERMISSION_CATALOG) == 24
    assert result.value.roles_created == 3
    assert result.value.grants_created == expected_grants

    created_roles = {
        call.args[0].name: call.args[0] for call in mock_uow.roles.create.call_args_list
    }
    assert created_roles["USER"].is_default is True
    assert created_roles["ADMIN"].is_default is False
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_seed_is_idempotent(mock_uow):
    mock_uow.permissions.get_by_name.side_effect = lambda name: Permission(
        id=uuid4(), name=name
    )
    mock_uow.roles.get_by_name.side_effect = lambda name: Role(id=uuid4(), name=name)
    mock_uow.permissions.get_grant.return_value = object()

    result = await SeedCatalogUseCase(mock_uow).execute()

    assert result.value.permissions_created == 0
    assert result.value.roles_created == 0
    assert result.value.grants_created == 0
    mock_uow.permissions.create.assert_not_awaited()
    mock_uow.roles.create.assert_not_awaited()
    mock_uow.permissions.save_grant.assert_not_awaited()


@pytest.mark.asyncio
async def test_seed_does_not_steal_existing_default(mock_uow):
    mock_uow.permissions.get_by_name.return_value = None
    mock_uow.permissions.create.side_effect = with_id
    mock_uow.roles.get_by_name.return_value = None
    mock_uow.roles.get_default.return_value = Role(id=uuid4(), name="MEMBER")
    mock_uow.roles.create.side_effect = with_id
    mock_uow.permissions.get_grant.return_value = None

    await SeedCatalogUseCase(mock_uow).execute()

    created = [call.args[0] for call in mock_uow.roles.create.call_args_list]
    assert not any(role.is_default for role in created)
