from datetime import UTC, datetime, timedelta
from uuid import uuid4

from jose import jwt

from config import AuthSettings
from src.app.services.token_service import TokenService


def test_access_token_round_trip(token_service):
    user_id = uuid4()

    token, expires_in = token_service.issue_access_token(user_id, "a@example.com")
    payload = token_service.verify_access_token(token)

    assert expires_in == 900
    assert payload["sub"] == str(user_id)
    assert payload["email"] == "a@example.com"
    assert payload["type"] == "access"


def test_refresh_tokens_for_same_user_differ(token_service):
    user_id = uuid4()

    first = token_service.issue_refresh_token(user_id)
    second = token_service.issue_refresh_token(user_id)

    assert first != second
    assert token_service.verify_refresh_token(first)["jti"] != (
        token_service.verify_refresh_token(second)["jti"]
    )


def test_refresh_token_is_not_accepted_as_access_token(token_service):
    refresh_token = token_service.issue_refresh_token(uuid4())

    assert token_service.verify_access_token(refresh_token) is None


def test_access_token_is_not_accepted_as_refresh_token(token_service):
    access_token, _ = token_service.issue_access_token(uuid4(), "a@example.com")

    assert token_service.verify_refresh_token(access_token) is None


def test_token_signed_with_other_secret_is_rejected(auth_settings, token_service):
    other = TokenService(
        AuthSettings(access_secret="other", refresh_secret="other-refresh")
    )
    token, _ = other.issue_access_token(uuid4(), "a@example.com")

    assert token_service.verify_access_token(token) is None


def test_expired_access_token_is_rejected(auth_settings, token_service):
    past = datetime.now(UTC) - timedelta(hours=1)
    token = jwt.encode(
        {
            "sub": str(uuid4()),
            "email": "a@example.com",
            "type": "access",
            "iat": past - timedelta(minutes=15),
            "exp": past,
        },
        auth_settings.access_secret,
        algorithm="HS256",
    )

    assert token_service.verify_access_token(token) is None


def test_garbage_token_is_rejected(token_service):
    assert token_service.verify_access_token("not-a-jwt") is None
    assert token_service.verify_refresh_token("not-a-jwt") is None
