"""Shared fixtures."""

import datetime

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

import app.models  # noqa: F401


@pytest.fixture
def now() -> datetime.datetime:
    return datetime.datetime(2025, 3, 10, 18, 0, tzinfo=datetime.timezone.utc)


@pytest.fixture
def sqlite_engine():
    """Fresh in-memory database with all tables."""
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()
