"""FastAPI application factory and configuration."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional, Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel

from . import models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_exception_handlers, register_routes
from .core import (
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
    build_engine,
    configure_logging,
)
from .services.scores import prune_scores

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine: Engine = app.state.engine
    if app.state.reset:
        SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    logger.info("schema ready")

    # A lowered capacity applies immediately instead of on the next write.
    with Session(engine) as session:
        pruned = prune_scores(session, app.state.capacity)
        session.commit()
    if pruned:
        logger.info("startup pruned %d entries beyond capacity %d", pruned, app.state.capacity)

    yield

    if app.state.owns_engine:
        engine.dispose()


def create_app(
    engine: Optional[Engine] = None,
    *,
    capacity: int = LEADERBOARD_CAPACITY,
    default_limit: int = LEADERBOARD_DEFAULT_LIMIT,
    max_limit: int = LEADERBOARD_MAX_LIMIT,
    allowed_origins: Optional[Sequence[str]] = None,
    reset: bool = DB_RESET,
) -> FastAPI:
    if capacity < 1:
        raise ValueError("capacity must be at least 1")
    if max_limit < 1:
        raise ValueError("max_limit must be at least 1")

    app = FastAPI(title="Pixel Scores API", version="0.1.0", lifespan=lifespan)

    app.state.owns_engine = engine is None
    app.state.engine = engine if engine is not None else build_engine(
        DATABASE_URL, sslmode=DATABASE_SSLMODE
    )
    app.state.capacity = capacity
    app.state.default_limit = default_limit
    app.state.max_limit = max_limit
    app.state.reset = reset

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(allowed_origins or ALLOWED_CORS_ORIGINS),
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    register_routes(app)
    return app


app = create_app()


def main() -> None:
    import uvicorn

    configure_logging(LOG_LEVEL)
    uvicorn.run("pixel_scores.app:app", host=HOST, port=PORT)


if __name__ == "__main__":
    main()
