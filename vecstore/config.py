"""
Configuration management for vecstore.
"""

from __future__ import annotations

import os
from pathlib import Path
from dotenv import load_dotenv


# Load environment variables
load_dotenv(os.getenv("VECSTORE_ENV_FILE", ".env"))


# Base paths
BASE_DIR = Path(__file__).parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))

SUPPORTED_BACKENDS = ("sql", "pgvector", "valkey")


def _parse_bounded_int(
    raw: str, param_name: str, min_val: int = 1, max_val: int = 256
) -> int:
    """Validate an integer setting against an inclusive range.

    Args:
        raw: Raw value from environment variable
        param_name: Name of the parameter for error messages
        min_val: Minimum allowed value (default 1)
        max_val: Maximum allowed value (default 256)

    Returns:
        Validated integer value

    Raises:
        ValueError: If value is not an integer or out of range
    """
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValueError(
            f"Invalid Config.{param_name}: must be an integer, got '{raw}'"
        )

    if value < min_val or value > max_val:
        raise ValueError(
            f"Invalid Config.{param_name}: must be between {min_val} and {max_val} inclusive, got '{value}'"
        )
    return value


class Config:
    """Application configuration."""

    # Backend selection
    VECTOR_STORE_BACKEND = os.getenv("VECTOR_STORE_BACKEND", "sql").lower()

    # PostgreSQL / DB-API
    DATABASE_URL = os.getenv("DATABASE_URL", "")
    DB_POOL_MIN_SIZE = _parse_bounded_int(
        os.getenv("DB_POOL_MIN_SIZE", "1"), "DB_POOL_MIN_SIZE", min_val=0
    )
    DB_POOL_MAX_SIZE = _parse_bounded_int(
        os.getenv("DB_POOL_MAX_SIZE", "10"), "DB_POOL_MAX_SIZE"
    )
    DB_POOL_TIMEOUT = float(os.getenv("DB_POOL_TIMEOUT", "10.0"))

    # SQL bookkeeping
    SQL_COLLECTIONS_TABLE = os.getenv("SQL_COLLECTIONS_TABLE", "vecstore_collections")
    SQL_COLLECTION_TABLE_PREFIX = os.getenv("SQL_COLLECTION_TABLE_PREFIX", "vecstore_")

    # Valkey / Redis
    REDIS_URL = os.getenv("REDIS_URL", "")
    REDIS_SOCKET_TIMEOUT = float(os.getenv("REDIS_SOCKET_TIMEOUT", "5.0"))

    # Worker pool for blocking backend calls
    WORKER_POOL_MAX_WORKERS = _parse_bounded_int(
        os.getenv("WORKER_POOL_MAX_WORKERS", "8"), "WORKER_POOL_MAX_WORKERS"
    )

    # Logging
    LOG_DIR = Path(os.getenv("LOG_DIR", DATA_DIR / "logs"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON_FORMAT = os.getenv("LOG_JSON_FORMAT", "true").lower() == "true"
    LOG_FILE_MAX_BYTES = int(os.getenv("LOG_FILE_MAX_BYTES", 10 * 1024 * 1024))
    LOG_FILE_BACKUP_COUNT = int(os.getenv("LOG_FILE_BACKUP_COUNT", 5))
    LOG_TO_FILE = os.getenv("LOG_TO_FILE", "false").lower() == "true"

    @classmethod
    def ensure_directories(cls):
        """Create required directories if they don't exist."""
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def validate(cls):
        """Validate config invariants and fail fast on misconfiguration."""
        if cls.VECTOR_STORE_BACKEND not in SUPPORTED_BACKENDS:
            raise ValueError(
                f"Invalid Config: VECTOR_STORE_BACKEND must be one of "
                f"{', '.join(SUPPORTED_BACKENDS)}, got '{cls.VECTOR_STORE_BACKEND}'"
            )

        if cls.VECTOR_STORE_BACKEND in ("sql", "pgvector") and not cls.DATABASE_URL:
            raise ValueError(
                f"Invalid Config: VECTOR_STORE_BACKEND='{cls.VECTOR_STORE_BACKEND}' requires DATABASE_URL"
            )

        if cls.VECTOR_STORE_BACKEND == "valkey" and not cls.REDIS_URL:
            raise ValueError(
                "Invalid Config: VECTOR_STORE_BACKEND='valkey' requires REDIS_URL"
            )

        if cls.DB_POOL_MIN_SIZE > cls.DB_POOL_MAX_SIZE:
            raise ValueError(
                "Invalid Config: DB_POOL_MIN_SIZE must not exceed DB_POOL_MAX_SIZE"
            )
