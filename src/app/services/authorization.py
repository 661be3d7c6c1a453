"""
Authorization Evaluator

Each protected route declares an ``AccessPolicy``. The evaluator checks the
request principal against the four requirement categories in a fixed
order; the first unmet category decides the denial.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from src.domain.principal import Principal
from src.domain.result import Error, Result, Return

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AccessPolicy:
    public: bool = False
    require_all_roles: Tuple[str, ...] = ()
    require_any_role: Tuple[str, ...] = ()
    require_all_permissions: Tuple[str, ...] = ()
    require_any_permission: Tuple[str, ...] = ()


PUBLIC = AccessPolicy(public=True)
AUTHENTICATED = AccessPolicy()
ADMIN_ONLY = AccessPolicy(require_any_role=("ADMIN",))
ADMIN_OR_INVESTOR = AccessPolicy(require_any_role=("ADMIN", "INVESTOR"))


def _denied(category: str, required: Tuple[str, ...], principal: Principal) -> Result:
    held = principal.roles if "role" in category else principal.permissions
    logger.warning(
        f"Access denied for user {principal.id}: {category} {list(required)} "
        f"not satisfied, held roles={sorted(principal.roles)} "
        f"permissions={sorted(principal.permissions)}"
    )
    return Return.err(
        Error(
            "INSUFFICIENT_PERMISSIONS",
            f"Insufficient permissions. Required {category.replace('_', ' ')}: "
            f"{', '.join(required)}",
            details={
                "category": category,
                "required": list(required),
                "held": sorted(held),
            },
        )
    )


class AuthorizationEvaluator:
    def check(self, policy: AccessPolicy, principal: Optional[Principal]) -> Result:
        """
        Decide whether ``principal`` satisfies ``policy``.

        Returns:
            ok(principal) when allowed (principal may be None on public
            routes), otherwise err UNAUTHENTICATED or INSUFFICIENT_PERMISSIONS
        """
        if policy.public:
            return Return.ok(principal)

        if principal is None or not principal.is_active:
            return Return.err(Error("UNAUTHENTICATED", "Authentication required"))

        if policy.require_all_roles and not all(
            principal.has_role(r) for r in policy.require_all_roles
        ):
            return _denied("all_roles", policy.require_all_roles, principal)

        if policy.require_any_role and not any(
            principal.has_role(r) for r in policy.require_any_role
        ):
            return _denied("any_role", policy.require_any_role, principal)

        if policy.require_all_permissions and not all(
            principal.has_permission(p) for p in policy.require_all_permissions
        ):
            return _denied("all_permissions", policy.require_all_permissions, principal)

        if policy.require_any_permission and not any(
            principal.has_permission(p) for p in policy.require_any_permission
        ):
            return _denied("any_permission", policy.require_any_permission, principal)

        return Return.ok(principal)
