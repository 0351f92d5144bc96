"""Application settings and environment helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from dotenv import load_dotenv

load_dotenv(override=False)

_PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _env_int(name: str, default: int) -> int:
    """Return an integer environment variable or raise an error."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} must be an integer") from exc


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _split_csv(raw: str | None) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    ordered: List[str] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            ordered.append(value)
    return ordered


def normalize_database_url(raw: str | None) -> str:
    """Return a SQLAlchemy URL, falling back to the local SQLite file."""

    url = (raw or "").strip()
    if not url:
        return f"sqlite:///{_PROJECT_ROOT / 'data' / 'app.db'}"
    # Hosted Postgres providers still hand out the legacy scheme.
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


def parse_origins(raw: str | None) -> List[str]:
    """Split CORS_ORIGIN into an allow-list; a wildcard collapses to ``["*"]``."""

    origins = _unique(_split_csv(raw if raw is not None else "*"))
    if not origins or "*" in origins:
        return ["*"]
    return origins


# Storage --------------------------------------------------------------------
DATABASE_URL = normalize_database_url(os.getenv("DATABASE_URL"))
DB_RESET = _env_bool("DB_RESET", False)
# libpq sslmode for Postgres, e.g. "require" for hosted databases.
DATABASE_SSLMODE = os.getenv("DATABASE_SSLMODE") or None


# Leaderboard behaviour ------------------------------------------------------
LEADERBOARD_CAPACITY = _env_int("LEADERBOARD_CAPACITY", 10)
LEADERBOARD_DEFAULT_LIMIT = _env_int("LEADERBOARD_DEFAULT_LIMIT", 10)
LEADERBOARD_MAX_LIMIT = _env_int("LEADERBOARD_MAX_LIMIT", 50)

if LEADERBOARD_CAPACITY < 1:
    raise RuntimeError("LEADERBOARD_CAPACITY must be at least 1")
if LEADERBOARD_MAX_LIMIT < 1:
    raise RuntimeError("LEADERBOARD_MAX_LIMIT must be at least 1")


# HTTP -----------------------------------------------------------------------
# CORS_ORIGIN can contain a comma-separated list for multi-domain deploys.
ALLOWED_CORS_ORIGINS = parse_origins(os.getenv("CORS_ORIGIN"))

HOST = os.getenv("HOST", "0.0.0.0")
PORT = _env_int("PORT", 3000)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


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
    "normalize_database_url",
    "parse_origins",
]
