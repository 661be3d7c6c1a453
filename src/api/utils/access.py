"""
Route access control

Each route declares an ``AccessPolicy`` through ``require(policy)``. The
dependency verifies the bearer access token, resolves the principal and
runs the authorization evaluator before the handler body executes.
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.api.error import raise_for_error
from src.app.services.authorization import AccessPolicy, AuthorizationEvaluator
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import ValidatePrincipalUseCase
from src.app.use_cases.roles import AuditContext
from src.depends import get_token_service, get_unit_of_work
from src.domain.principal import Principal

bearer = HTTPBearer(auto_error=False)
evaluator = AuthorizationEvaluator()


async def resolve_principal(
    token: str, uow: UnitOfWork, token_service: TokenService
) -> Optional[Principal]:
    """Principal behind an access token, or None if the token or user is not valid"""
    payload = token_service.verify_access_token(token)
    if payload is None:
        return None
    try:
        user_id = UUID(payload["sub"])
    except ValueError:
        return None
    return await ValidatePrincipalUseCase(uow).execute(user_id)


def require(policy: AccessPolicy):
    """
    Build the dependency enforcing ``policy``.

    Returns the request principal (None on public routes).

    Raises:
        ClientError: 401 UNAUTHENTICATED or 403 INSUFFICIENT_PERMISSIONS
    """

    async def dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
        uow: UnitOfWork = Depends(get_unit_of_work),
        token_service: TokenService = Depends(get_token_service),
    ) -> Optional[Principal]:
        if policy.public:
            return None

        principal = None
        if credentials is not None:
            principal = await resolve_principal(
                credentials.credentials, uow, token_service
            )

        result = evaluator.check(policy, principal)
        if result.is_err():
            raise_for_error(result.error)
        return result.value

    return dependency


def client_ip(request: Request) -> Optional[str]:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else None


def audit_context(request: Request, principal: Optional[Principal]) -> AuditContext:
    return AuditContext(
        actor_id=principal.id if principal else None,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
