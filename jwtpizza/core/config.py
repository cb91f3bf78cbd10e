"""
Runtime configuration for the JWT Pizza auth service.

Values come from environment variables (optionally loaded from a .env file).
Nothing here is read at import time by the auth components themselves: the
application builds a Settings instance once and injects the pieces each
component needs (the JWT secret goes into the TokenCodec, the database URL
into the Database, and so on).
"""

import os
import secrets
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Base directory of the project (parent of 'jwtpizza')
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Database Directory
DB_DIR = BASE_DIR / "db"

VERSION = "1.0.0"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    """Process-wide configuration, fixed for the lifetime of the app."""

    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    # True when the secret was generated because JWT_SECRET_KEY was unset
    jwt_secret_generated: bool = False

    database_url: str = f"sqlite+aiosqlite:///{DB_DIR / 'jwtpizza.db'}"
    sql_debug: bool = False

    # Bootstrap admin, created on startup when no users exist
    default_admin_name: str = "常用名字"
    default_admin_email: str = "a@jwt.com"
    default_admin_password: Optional[str] = None

    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    trusted_hosts: List[str] = field(default_factory=lambda: ["*"])
    enable_docs: bool = True

    log_level: str = "INFO"
    log_json: bool = True
    log_dev_mode: bool = False

    metrics_source: str = "jwt-pizza-service"
    version: str = VERSION

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the environment (and .env, if present)."""
        load_dotenv()

        secret = os.getenv("JWT_SECRET_KEY")
        generated = False
        if not secret:
            # Development only: tokens will not survive a restart
            secret = secrets.token_urlsafe(32)
            generated = True

        return cls(
            jwt_secret_key=secret,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_secret_generated=generated,
            database_url=os.getenv(
                "DATABASE_URL",
                f"sqlite+aiosqlite:///{DB_DIR / 'jwtpizza.db'}",
            ),
            sql_debug=_env_flag("SQL_DEBUG"),
            default_admin_name=os.getenv("DEFAULT_ADMIN_NAME", "常用名字"),
            default_admin_email=os.getenv("DEFAULT_ADMIN_EMAIL", "a@jwt.com"),
            default_admin_password=os.getenv("DEFAULT_ADMIN_PASSWORD") or None,
            cors_allow_origins=_env_list("CORS_ALLOW_ORIGINS", "*"),
            trusted_hosts=_env_list("TRUSTED_HOSTS", "*"),
            enable_docs=_env_flag("ENABLE_DOCS", "true"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_json=_env_flag("LOG_JSON", "true"),
            log_dev_mode=_env_flag("LOG_DEV_MODE"),
            metrics_source=os.getenv("METRICS_SOURCE", "jwt-pizza-service"),
        )

    def ensure_db_dir(self) -> None:
        """Create the default SQLite directory when the default URL is in use."""
        if self.database_url.startswith("sqlite") and str(DB_DIR) in self.database_url:
            os.makedirs(DB_DIR, exist_ok=True)
