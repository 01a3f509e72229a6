"""
Database engine management.

Provides the SQLModel engine; request-scoped sessions are opened by the
data accessor.
"""

from sqlalchemy.engine import Engine
from sqlmodel import create_engine

from app.core.config import settings


def make_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections are shared across threads."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, echo=echo, connect_args=connect_args, pool_pre_ping=True)


engine = make_engine(settings.DATABASE_URL, echo=settings.DEBUG)
