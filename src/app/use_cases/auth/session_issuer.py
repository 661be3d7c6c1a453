"""
Helpers shared by the use cases that open a new session.
"""

from typing import Optional, Tuple

from src.app.services.permission_aggregator import PermissionAggregator
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Session, User
from .dtos import AuthResponse, PrincipalSummary


async def open_session(
    uow: UnitOfWork,
    token_service: TokenService,
    user: User,
    user_agent: Optional[str] = None,
    ip_address: Optional[str] = None,
) -> Tuple[str, str, int, Session]:
    """
    Issue a token pair and persist the session keyed by the refresh token.

    Store errors propagate; the caller must not report success without the
    session row.

    Returns:
        (access_token, refresh_token, expires_in, session)
    """
    access_token, expires_in = token_service.issue_access_token(user.id, user.email)
    refresh_token = token_service.issue_refresh_token(user.id)

    session = Session(
        user_id=user.id,
        refresh_token_hash=Session.hash_token(refresh_token),
        expires_at=token_service.refresh_expires_at(),
        user_agent=user_agent,
        ip_address=ip_address,
    )
    session = await uow.sessions.create(session)
    return access_token, refresh_token, expires_in, session


async def build_auth_response(
    uow: UnitOfWork,
    user: User,
    access_token: str,
    refresh_token: str,
    expires_in: int,
) -> AuthResponse:
    access = await PermissionAggregator(uow).resolve(user.id)
    return AuthResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=expires_in,
        user=PrincipalSummary(
            id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            roles=sorted(access.roles),
            permissions=sorted(access.permissions),
        ),
    )
