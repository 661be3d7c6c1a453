from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from config import AuthSettings
from src.api.error import raise_for_error
from src.api.utils.access import client_ip, require
from src.app.services.authorization import AUTHENTICATED
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import TokenService
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    AuthResponse,
    GetProfileUseCase,
    LoginUseCase,
    LogoutAllResponse,
    LogoutAllUseCase,
    LogoutResponse,
    LogoutUseCase,
    ProfileResponse,
    RecordSessionActivityUseCase,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    SessionActivityResponse,
)
from src.depends import (
    get_auth_settings,
    get_password_hasher,
    get_token_service,
    get_unit_of_work,
)
from src.domain.principal import Principal

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
async def register(
    request: RegisterRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """
    Register a new account.

    Grants the default role and returns a token pair for the first session.

    Raises:
        - 409 Conflict: Email already exists
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
    """
    command = RegisterCommand(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
        user_agent=http_request.headers.get("user-agent"),
        ip_address=client_ip(http_request),
    )

    use_case = RegisterUseCase(uow, token_service, password_hasher, settings)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class LoginRequest(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
    password_hasher: PasswordHasher = Depends(get_password_hasher),
):
    """
    User Login

    Opens a new session; sessions on other devices are untouched.

    Raises:
        - 401 Unauthorized: Invalid credentials
    """
    use_case = LoginUseCase(uow, token_service, password_hasher)
    result = await use_case.execute(
        request.email,
        request.password,
        user_agent=http_request.headers.get("user-agent"),
        ip_address=client_ip(http_request),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., min_length=1, description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=AuthResponse)
async def refresh(
    request: RefreshRequest,
    http_request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    token_service: TokenService = Depends(get_token_service),
):
    """
    Rotate a refresh token.

    The presented token is consumed; replaying it afterwards fails.

    Raises:
        - 401 Unauthorized: Invalid, expired, revoked or already used token
    """
    use_case = RefreshTokenUseCase(uow, token_service)
    result = await use_case.execute(
        request.refresh_token,
        user_agent=http_request.headers.get("user-agent"),
        ip_address=client_ip(http_request),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    request: RefreshRequest,
    http_request: Request,
    principal: Principal = Depends(require(AUTHENTICATED)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Revoke the session of the given refresh token. Idempotent."""
    use_case = LogoutUseCase(uow)
    result = await use_case.execute(
        request.refresh_token,
        user_id=principal.id,
        user_agent=http_request.headers.get("user-agent"),
        ip_address=client_ip(http_request),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/logout-all", status_code=status.HTTP_200_OK, response_model=LogoutAllResponse
)
async def logout_all(
    http_request: Request,
    principal: Principal = Depends(require(AUTHENTICATED)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Revoke every session of the caller (sign out everywhere)"""
    use_case = LogoutAllUseCase(uow)
    result = await use_case.execute(
        principal.id,
        user_agent=http_request.headers.get("user-agent"),
        ip_address=client_ip(http_request),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get("/profile", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def profile(
    principal: Principal = Depends(require(AUTHENTICATED)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = GetProfileUseCase(uow)
    result = await use_case.execute(principal)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/session-activity",
    status_code=status.HTTP_200_OK,
    response_model=SessionActivityResponse,
)
async def session_activity(
    request: RefreshRequest,
    http_request: Request,
    principal: Principal = Depends(require(AUTHENTICATED)),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Record last-seen user agent and IP on a live session"""
    use_case = RecordSessionActivityUseCase(uow)
    result = await use_case.execute(
        request.refresh_token,
        user_agent=http_request.headers.get("user-agent"),
        ip_address=client_ip(http_request),
    )

    if result.is_err():
        raise_for_error(result.error)

    return result.value
