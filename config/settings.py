"""
Configuration Management

Loads application settings from environment variables (and a local .env file).
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_DATABASE_URL = f"sqlite:///{DATA_DIR / 'campus_navigator.db'}"


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    port: int = 4000
    database_url: str = DEFAULT_DATABASE_URL
    client_origin: str = "http://localhost:8000"
    jwt_secret: str = "dev-secret-change-me"
    cookie_name: str = "token"
    cookie_days: int = 7
    cookie_secure: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls):
        """
        Build settings from the process environment.

        Returns:
            Settings: Settings with environment overrides applied
        """
        load_dotenv()
        return cls(
            port=int(os.getenv("PORT", "4000").strip()),
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL).strip(),
            client_origin=os.getenv("CLIENT_ORIGIN", "http://localhost:8000").strip(),
            jwt_secret=os.getenv("JWT_SECRET", "dev-secret-change-me"),
            cookie_name=os.getenv("AUTH_COOKIE_NAME", "token").strip(),
            cookie_days=int(os.getenv("AUTH_COOKIE_DAYS", "7").strip()),
            cookie_secure=_env_bool("AUTH_COOKIE_SECURE"),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        )
