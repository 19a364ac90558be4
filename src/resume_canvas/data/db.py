"""Database configuration and session management.

SQLAlchemy 2.x engine, session factory and table creation for the
persistence API. The database URL can be overridden via the ``DB_URL``
environment variable; it defaults to ``sqlite:///<project_root>/database.db``.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from resume_canvas.config import get_project_root


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""


_engine: Engine | None = None
_engine_url: str | None = None
_SessionLocal: sessionmaker[Session] | None = None


def get_database_url() -> str:
    """Return the database URL, allowing overrides via environment variable."""
    env_url = os.getenv("DB_URL")
    if env_url:
        return env_url

    db_path = get_project_root() / "database.db"
    return URL.create("sqlite", database=str(db_path)).render_as_string(hide_password=False)


def _get_engine() -> Engine:
    global _engine, _engine_url, _SessionLocal
    database_url = get_database_url()
    if _engine is None or database_url != _engine_url:
        if _engine is not None:
            _engine.dispose()
        _engine = create_engine(database_url, echo=False, future=True)
        _engine_url = database_url
        _SessionLocal = None
        _ensure_tables_created(_engine)
    return _engine


def _ensure_tables_created(engine: Engine) -> None:
    # Import ORM models so their metadata is registered on Base before create_all.
    from resume_canvas.data.models import canvas_project  # noqa: F401

    Base.metadata.create_all(bind=engine)


def _get_session_factory() -> sessionmaker[Session]:
    global _SessionLocal
    engine = _get_engine()
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    return _SessionLocal


def init_db() -> None:
    """Create all tables defined on the Base metadata.

    Tables are also created lazily on first database access.
    """
    _get_engine()


@contextmanager
def get_session() -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    session = _get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
