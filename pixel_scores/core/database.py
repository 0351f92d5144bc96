"""Database configuration and session helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from fastapi import Request
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine


def build_engine(
    database_url: str, *, sslmode: Optional[str] = None, echo: bool = False
) -> Engine:
    """Create the engine backing the score store.

    SQLite files get their parent directory created; in-memory SQLite shares
    a single connection so every session sees the same database. ``sslmode``
    is handed to the Postgres driver unless the URL already sets one.
    """

    url = make_url(database_url)
    kwargs: Dict[str, Any] = {"echo": echo}

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        else:
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    else:
        kwargs["pool_pre_ping"] = True
        if sslmode and "sslmode" not in url.query:
            kwargs["connect_args"] = {"sslmode": sslmode}

    return create_engine(url, **kwargs)


def get_session(request: Request) -> Iterator[Session]:
    """FastAPI dependency that yields a session bound to the app's engine."""

    with Session(request.app.state.engine) as session:
        yield session


__all__ = ["build_engine", "get_session"]
