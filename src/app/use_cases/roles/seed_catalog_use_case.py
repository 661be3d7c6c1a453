"""
Seed Catalog Use Case

Idempotently installs the portal's permission catalog and its three
built-in roles.
"""

import logging

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Permission, Role, RolePermission
from src.domain.result import Result, Return
from .dtos import SeedCatalogResponse

logger = logging.getLogger(__name__)

# (name, description, resource, action)
PERMISSION_CATALOG = [
    # User management
    ("CREATE_USER", "Create new users", "USER", "CREATE"),
    ("VIEW_USER", "View user details", "USER", "READ"),
    ("UPDATE_USER", "Update user information", "USER", "UPDATE"),
    ("DELETE_USER", "Delete users", "USER", "DELETE"),
    # Role management
    ("CREATE_ROLE", "Create new roles", "ROLE", "CREATE"),
    ("VIEW_ROLE", "View role details", "ROLE", "READ"),
    ("UPDATE_ROLE", "Update role information", "ROLE", "UPDATE"),
    ("DELETE_ROLE", "Delete roles", "ROLE", "DELETE"),
    ("ASSIGN_ROLE", "Assign roles to users", "ROLE", "ASSIGN"),
    ("REVOKE_ROLE", "Revoke roles from users", "ROLE", "REVOKE"),
    # Permission management
    ("CREATE_PERMISSION", "Create new permissions", "PERMISSION", "CREATE"),
    ("VIEW_PERMISSION", "View permission details", "PERMISSION", "READ"),
    ("UPDATE_PERMISSION", "Update permission information", "PERMISSION", "UPDATE"),
    ("DELETE_PERMISSION", "Delete permissions", "PERMISSION", "DELETE"),
    # Dashboards
    ("VIEW_ADMIN_DASHBOARD", "Access admin dashboard", "DASHBOARD", "READ"),
    ("VIEW_INVESTOR_DASHBOARD", "Access investor dashboard", "DASHBOARD", "READ"),
    ("VIEW_USER_DASHBOARD", "Access user dashboard", "DASHBOARD", "READ"),
    # Portfolios
    ("CREATE_PORTFOLIO", "Create new portfolios", "PORTFOLIO", "CREATE"),
    ("VIEW_PORTFOLIO", "View portfolio details", "PORTFOLIO", "READ"),
    ("UPDATE_PORTFOLIO", "Update portfolio information", "PORTFOLIO", "UPDATE"),
    ("DELETE_PORTFOLIO", "Delete portfolios", "PORTFOLIO", "DELETE"),
    # System
    ("VIEW_AUDIT_LOGS", "View system audit logs", "SYSTEM", "READ"),
    ("MANAGE_SYSTEM_SETTINGS", "Manage system settings", "SYSTEM", "MANAGE"),
    ("VIEW_SYSTEM_METRICS", "View system metrics", "SYSTEM", "READ"),
]

ALL_PERMISSIONS = [name for name, _, _, _ in PERMISSION_CATALOG]

# name -> (description, is_default, permission names)
ROLE_CATALOG = {
    "ADMIN": (
        "System administrator with full access to all features",
        False,
        ALL_PERMISSIONS,
    ),
    "INVESTOR": (
        "Investor with access to portfolio management and limited user features",
        False,
        [
            "VIEW_USER",
            "VIEW_ROLE",
            "VIEW_PERMISSION",
            "VIEW_INVESTOR_DASHBOARD",
            "VIEW_USER_DASHBOARD",
            "CREATE_PORTFOLIO",
            "VIEW_PORTFOLIO",
            "UPDATE_PORTFOLIO",
        ],
    ),
    "USER": (
        "Basic user with limited access to personal features",
        True,
        ["VIEW_USER_DASHBOARD", "VIEW_PORTFOLIO"],
    ),
}


class SeedCatalogUseCase:
    """
    Install missing catalog entries; existing rows are left as they are.

    A catalog role is only created as default when no other default exists.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[SeedCatalogResponse]:
        permissions_created = 0
        roles_created = 0
        grants_created = 0

        async with self.uow:
            permissions = {}
            for name, description, resource, action in PERMISSION_CATALOG:
                permission = await self.uow.permissions.get_by_name(name)
                if permission is None:
                    permission = await self.uow.permissions.create(
                        Permission(
                            name=name,
                            description=description,
                            resource=resource,
                            action=action,
                        )
                    )
                    permissions_created += 1
                permissions[name] = permission

            for role_name, (description, is_default, granted) in ROLE_CATALOG.items():
                role = await self.uow.roles.get_by_name(role_name)
                if role is None:
                    if is_default and await self.uow.roles.get_default() is not None:
                        is_default = False
                    role = await self.uow.roles.create(
                        Role(
                            name=role_name,
                            description=description,
                            is_default=is_default,
                        )
                    )
                    roles_created += 1

                for permission_name in granted:
                    permission = permissions[permission_name]
                    grant = await self.uow.permissions.get_grant(role.id, permission.id)
                    if grant is None:
                        await self.uow.permissions.save_grant(
                            RolePermission(role_id=role.id, permission_id=permission.id)
                        )
                        grants_created += 1

            await self.uow.commit()

        logger.info(
            f"Catalog seeded: {permissions_created} permissions, "
            f"{roles_created} roles, {grants_created} grants created"
        )
        return Return.ok(
            SeedCatalogResponse(
                permissions_created=permissions_created,
                roles_created=roles_created,
                grants_created=grants_created,
            )
        )
