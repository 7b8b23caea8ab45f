"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.

Components never read these constants for connection details directly;
they receive a `DatabaseConfig` built with `DatabaseConfig.from_env()`.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
DB_NAME: str = os.getenv("DB_NAME", "checkin")
DB_USER: str = os.getenv("DB_USER", "checkin_user")
DB_PASS: str = os.getenv("DB_PASS", "")

DATABASE_URL: str = os.getenv(
    "DATABASE_URL",
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

DB_POOL_MIN: int = int(os.getenv("DB_POOL_MIN", "1"))
DB_POOL_MAX: int = int(os.getenv("DB_POOL_MAX", "5"))

# ── Queries ───────────────────────────────────────────────
DEFAULT_PAGE_LIMIT: int = int(os.getenv("DEFAULT_PAGE_LIMIT", "100"))
DELETED_ACCOUNT_LABEL: str = os.getenv("DELETED_ACCOUNT_LABEL", "(Deleted user)")

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


@dataclass(frozen=True)
class DatabaseConfig:
    """
    Connection settings handed to `db.connection.Database`.

    Attributes:
        url: libpq connection string.
        min_conn: Minimum number of pooled connections.
        max_conn: Maximum number of pooled connections.
    """
    url: str
    min_conn: int = 1
    max_conn: int = 5

    @classmethod
    def from_env(cls) -> "DatabaseConfig":
        """Build a config from the values loaded above."""
        return cls(url=DATABASE_URL, min_conn=DB_POOL_MIN, max_conn=DB_POOL_MAX)
