"""Core configuration and infrastructure helpers."""

from .config import (
    ALLOWED_CORS_ORIGINS,
    DATABASE_SSLMODE,
    DATABASE_URL,
    DB_RESET,
    HOST,
    LEADERBOARD_CAPACITY,
    LEADERBOARD_DEFAULT_LIMIT,
    LEADERBOARD_MAX_LIMIT,
    LOG_LEVEL,
    PORT,
)
from .database import build_engine, get_session
from .errors import InvalidInput, PixelScoresError, StorageError
from .log import configure_logging
from .time import isoformat_utc, utcnow

__all__ = [
    "ALLOWED_CORS_ORIGINS",
    "DATABASE_SSLMODE",
    "DATABASE_URL",
    "DB_RESET",
    "HOST",
    "LEADERBOARD_CAPACITY",
    "LEADERBOARD_DEFAULT_LIMIT",
    "LEADERBOARD_MAX_LIMIT",
    "LOG_LEVEL",
    "PORT",
    "InvalidInput",
    "PixelScoresError",
    "StorageError",
    "build_engine",
    "configure_logging",
    "get_session",
    "isoformat_utc",
    "utcnow",
]
