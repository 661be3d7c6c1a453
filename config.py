import os
import re
from dataclasses import dataclass

import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./portal.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-access-secret-change-in-production")
    JWT_REFRESH_SECRET = data.get(
        "JWT_REFRESH_SECRET", "dev-refresh-secret-change-in-production"
    )
    JWT_EXPIRATION = data.get("JWT_EXPIRATION", "15m")
    JWT_REFRESH_EXPIRATION = data.get("JWT_REFRESH_EXPIRATION", "7d")
    DEFAULT_ROLE = data.get("DEFAULT_ROLE", "USER")
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    SESSION_CLEANUP_INTERVAL_SECONDS = int(
        data.get("SESSION_CLEANUP_INTERVAL_SECONDS", 3600)
    )


DEFAULT_ACCESS_TOKEN_SECONDS = 900
DEFAULT_REFRESH_TOKEN_SECONDS = 7 * 24 * 60 * 60

_DURATION_PATTERN = re.compile(r"^(\d+)([mhd])$")
_UNIT_SECONDS = {"m": 60, "h": 60 * 60, "d": 24 * 60 * 60}


def parse_duration(value: str, default: int) -> int:
    """
    Convert an expiry string such as "15m", "2h" or "7d" to seconds.

    Unrecognized formats fall back to ``default``.
    """
    match = _DURATION_PATTERN.match(str(value).strip())
    if match is None:
        return default
    amount, unit = match.groups()
    return int(amount) * _UNIT_SECONDS[unit]


@dataclass(frozen=True)
class AuthSettings:
    """Immutable auth configuration, built once at process start"""

    access_secret: str
    refresh_secret: str
    access_token_ttl_seconds: int = DEFAULT_ACCESS_TOKEN_SECONDS
    refresh_token_ttl_seconds: int = DEFAULT_REFRESH_TOKEN_SECONDS
    default_role: str = "USER"
    bcrypt_rounds: int = 12
    algorithm: str = "HS256"

    @classmethod
    def from_config(cls, config) -> "AuthSettings":
        return cls(
            access_secret=config.JWT_SECRET,
            refresh_secret=config.JWT_REFRESH_SECRET,
            access_token_ttl_seconds=parse_duration(
                config.JWT_EXPIRATION, DEFAULT_ACCESS_TOKEN_SECONDS
            ),
            refresh_token_ttl_seconds=parse_duration(
                config.JWT_REFRESH_EXPIRATION, DEFAULT_REFRESH_TOKEN_SECONDS
            ),
            default_role=config.DEFAULT_ROLE,
            bcrypt_rounds=config.BCRYPT_ROUNDS,
        )
