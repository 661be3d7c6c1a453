import pytest
from unittest.mock import AsyncMock, MagicMock

from config import AuthSettings
from src.app.services.password_hasher import PasswordHasher
from src.app.services.token_service import TokenService


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Every repository method is awaitable
    uow.users = AsyncMock()
    uow.roles = AsyncMock()
    uow.permissions = AsyncMock()
    uow.user_roles = AsyncMock()
    uow.sessions = AsyncMock()
    uow.audit_logs = AsyncMock()

    uow.user_roles.get_active_grants.return_value = []
    return uow


@pytest.fixture
def auth_settings():
    return AuthSettings(
        access_secret="unit-access-secret",
        refresh_secret="unit-refresh-secret",
        access_token_ttl_seconds=900,
        refresh_token_ttl_seconds=7 * 24 * 60 * 60,
        default_role="USER",
        bcrypt_rounds=4,
    )


@pytest.fixture
def token_service(auth_settings):
    return TokenService(auth_settings)


@pytest.fixture
def password_hasher():
    return PasswordHasher(rounds=4)
