"""
Principal

The authenticated subject of a request. Computed per request from the
user row and its active role grants; never persisted.
"""

from dataclasses import dataclass, field
from typing import FrozenSet
from uuid import UUID


@dataclass(frozen=True)
class Principal:
    id: UUID
    email: str
    roles: FrozenSet[str] = field(default_factory=frozenset)
    permissions: FrozenSet[str] = field(default_factory=frozenset)
    is_active: bool = True

    def has_role(self, role: str) -> bool:
        return role in self.roles

    def has_permission(self, permission: str) -> bool:
        return permission in self.permissions
