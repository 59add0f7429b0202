"""Database engine/session helpers."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

DEFAULT_DB_URL = "sqlite:///compile_stats.db"


def _is_in_memory_sqlite(db_url: str) -> bool:
    url = make_url(db_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def create_db_engine(db_url: str = DEFAULT_DB_URL) -> Engine:
    """Create an engine for a season store.

    An in-memory SQLite URL shares one connection so every session sees the
    same tables.
    """
    if _is_in_memory_sqlite(db_url):
        return create_engine(
            db_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(db_url, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory; records stay readable after commit."""
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
