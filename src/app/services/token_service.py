"""
Token Service

Issues and verifies the two bearer credentials of the portal:

- Access token: short-lived, carries ``sub`` and ``email``
- Refresh token: long-lived, carries ``sub`` and a random ``jti`` so that
  two refresh tokens minted for the same user in the same second still
  differ (the session store keys on the token)

Both are HS256 JWTs signed with distinct secrets.
"""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional, Tuple
from uuid import UUID

from jose import JWTError, jwt

from config import AuthSettings

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenService:
    def __init__(self, settings: AuthSettings):
        self.settings = settings

    def issue_access_token(self, subject_id: UUID, email: str) -> Tuple[str, int]:
        """
        Generate an access token.

        Returns:
            (token, expires_in_seconds)
        """
        now = datetime.now(UTC)
        expires_in = self.settings.access_token_ttl_seconds
        payload = {
            "sub": str(subject_id),
            "email": email,
            "type": ACCESS_TOKEN_TYPE,
            "iat": now,
            "exp": now + timedelta(seconds=expires_in),
        }
        token = jwt.encode(
            payload, self.settings.access_secret, algorithm=self.settings.algorithm
        )
        return token, expires_in

    def issue_refresh_token(self, subject_id: UUID) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": str(subject_id),
            "type": REFRESH_TOKEN_TYPE,
            "jti": secrets.token_hex(16),
            "iat": now,
            "exp": now + timedelta(seconds=self.settings.refresh_token_ttl_seconds),
        }
        return jwt.encode(
            payload, self.settings.refresh_secret, algorithm=self.settings.algorithm
        )

    def refresh_expires_at(self) -> datetime:
        """Naive UTC expiry for a session created now"""
        return datetime.now(UTC).replace(tzinfo=None) + timedelta(
            seconds=self.settings.refresh_token_ttl_seconds
        )

    def verify_access_token(self, token: str) -> Optional[dict]:
        """
        Verify and decode an access token.

        Returns:
            Decoded payload dict or None if invalid, expired or not an access token
        """
        payload = self._decode(token, self.settings.access_secret)
        if payload is None or payload.get("type") != ACCESS_TOKEN_TYPE:
            return None
        if not payload.get("sub"):
            return None
        return payload

    def verify_refresh_token(self, token: str) -> Optional[dict]:
        payload = self._decode(token, self.settings.refresh_secret)
        if payload is None or payload.get("type") != REFRESH_TOKEN_TYPE:
            return None
        if not payload.get("sub"):
            return None
        return payload

    def _decode(self, token: str, secret: str) -> Optional[dict]:
        try:
            return jwt.decode(token, secret, algorithms=[self.settings.algorithm])
        except JWTError:
            return None
