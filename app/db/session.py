"""
Database session management.

Provides SQLModel engine creation. Sessions are opened per request by
the store dependencies in ``app.api.dependencies``.
"""

from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from app.core.config import Settings


def build_engine(settings: Settings) -> Engine:
    """
    Create the database engine for the configured URL.

    SQLite is allowed across threads (FastAPI runs sync endpoints in a
    thread pool); an in-memory SQLite database is pinned to a single
    connection so every session sees the same data.
    """
    url = settings.database_url
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=settings.DEBUG, **kwargs)

    return create_engine(
        url,
        echo=settings.DEBUG,  # Log SQL queries in debug mode
        pool_pre_ping=True,   # Verify connections before using
        pool_size=5,          # Connection pool size
        max_overflow=10       # Max connections beyond pool_size
    )
