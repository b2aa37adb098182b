"""
Pytest configuration for backend tests.

Provides an isolated SQLite database per test run using a temporary file
(rather than in-memory) to support multiple connections and sessions.

DATABASE_URL is set when this module is imported, before any test module
imports dispensary.db.session, so the engine points at the temporary file.

Fixtures:
- db_engine (session scope): Builds tables on the temporary database and tears down.
- db_session (function scope): Provides a clean Session per test, with FK enabled.
"""

from __future__ import annotations

import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest


# Ensure the 'backend' directory is on sys.path so we can import dispensary modules when running tests from repo root
CURRENT_DIR = Path(__file__).parent
BACKEND_ROOT = (CURRENT_DIR / "..").resolve()
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

_TMP_DIR = Path(tempfile.mkdtemp(prefix="dispensary-tests-"))
_DB_FILE = _TMP_DIR / "test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{_DB_FILE.as_posix()}"
os.environ.setdefault("SQLALCHEMY_ECHO", "0")
os.environ.setdefault("LOG_LEVEL", "WARNING")


@pytest.fixture(scope="session")
def db_engine() -> "Generator":
    """
    Create all tables on the temporary SQLite database for the test session.
    """
    from dispensary.db.session import engine  # type: ignore
    from dispensary.db.base import Base  # type: ignore

    Base.metadata.create_all(bind=engine)

    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
        shutil.rmtree(_TMP_DIR, ignore_errors=True)


@pytest.fixture(scope="function")
def db_session(db_engine) -> "Generator":
    """
    Provide a fresh Session for each test function.
    Truncates tables before each test for isolation.
    """
    from sqlalchemy import text  # type: ignore
    from dispensary.db.session import SessionLocal  # type: ignore
    from dispensary.db.base import Base  # type: ignore

    session = SessionLocal()
    session.execute(text("PRAGMA foreign_keys = ON"))

    try:
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
    except Exception:
        session.rollback()
        raise

    try:
        yield session
    finally:
        session.rollback()
        session.close()
