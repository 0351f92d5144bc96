from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from pixel_scores.app import create_app
from pixel_scores.core import build_engine


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def app(engine):
    return create_app(
        engine,
        capacity=10,
        default_limit=10,
        max_limit=50,
        allowed_origins=["*"],
        reset=False,
    )


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client
