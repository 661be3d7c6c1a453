"""
Permission Aggregator

Computes the effective roles and permissions of a user from the store.
Recomputed on every call; revocations take effect on the next request.
"""

from dataclasses import dataclass, field
from typing import FrozenSet
from uuid import UUID

from src.app.services.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class ResolvedAccess:
    roles: FrozenSet[str] = field(default_factory=frozenset)
    permissions: FrozenSet[str] = field(default_factory=frozenset)


class PermissionAggregator:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def resolve(self, user_id: UUID) -> ResolvedAccess:
        """
        Union of the active permissions over the user's active roles.

        The caller owns the unit-of-work block. A user without roles (or an
        unknown id) resolves to two empty sets.
        """
        grants = await self.uow.user_roles.get_active_grants(user_id)

        roles = set()
        permissions = set()
        for role_name, permission_name in grants:
            roles.add(role_name)
            if permission_name is not None:
                permissions.add(permission_name)

        return ResolvedAccess(roles=frozenset(roles), permissions=frozenset(permissions))
