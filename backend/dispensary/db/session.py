"""
SQLAlchemy session setup with FastAPI-compatible dependency.

- engine: synchronous engine (SQLite by default, PostgreSQL in production).
- SessionLocal: sessionmaker factory bound to the engine.
- get_db(): yields a session per request and ensures it is closed.

The database URL comes from settings (DATABASE_URL or DB_URL). Connection
pooling, isolation and locking are left entirely to the engine and the server.
"""

from __future__ import annotations

from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from dispensary.core.config import get_settings

__all__ = ["engine", "SessionLocal", "get_db", "make_engine", "DATABASE_URL"]


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def make_engine(url: str, *, echo: bool = False) -> Engine:
    """
    Create an engine for `url`.

    SQLite gets check_same_thread=False (FastAPI runs sync routes in a thread
    pool), foreign keys switched on per connection and a Unicode-aware lower()
    so case-insensitive search folds accented letters. Other backends get
    pool_pre_ping to drop stale connections.
    """
    if url.startswith("sqlite"):
        eng = create_engine(url, connect_args={"check_same_thread": False}, echo=echo)

        @event.listens_for(eng, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:  # pragma: no cover
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("PRAGMA foreign_keys=ON")
            finally:
                cursor.close()
            # The built-in lower() only folds ASCII
            dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)

        return eng

    return create_engine(url, pool_pre_ping=True, echo=echo)


_settings = get_settings()
DATABASE_URL: str = _settings.db_url

engine = make_engine(DATABASE_URL, echo=_settings.sqlalchemy_echo)

# expire_on_commit=False keeps loaded attributes usable after the seed tool commits
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    class_=Session,
)


def get_db() -> Generator[Session, None, None]:
    """
    Yield a database session and ensure it's closed afterwards.

    Usage in FastAPI:
        db: Session = Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
