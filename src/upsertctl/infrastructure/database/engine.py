"""Database engine setup.

SQLAlchemy Core (not ORM) is used because the store only ever issues
single-row selects, inserts and updates. No benefit from session
management or identity maps.

SQLite URLs get WAL journaling and enforced foreign keys on every new
connection; other dialects are passed through untouched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url


def sqlite_url(db_path: Path) -> str:
    """SQLAlchemy URL for a SQLite file at *db_path*."""
    return f"sqlite:///{db_path}"


def create_db_engine(url: str | Path, *, echo: bool = False) -> Engine:
    """Create an engine for *url* (a SQLAlchemy URL or a SQLite file path)."""
    if isinstance(url, Path):
        url = sqlite_url(url)
    engine = create_engine(url, echo=echo)

    if make_url(url).get_backend_name() == "sqlite":

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine
