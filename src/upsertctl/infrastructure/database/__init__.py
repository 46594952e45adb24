"""SQL-backed record store via SQLAlchemy Core."""

from upsertctl.infrastructure.database.engine import create_db_engine, sqlite_url
from upsertctl.infrastructure.database.schema import (
    kind_for_table,
    reflect_kinds,
    reflect_tables,
)
from upsertctl.infrastructure.database.store import SqlRecordStore

__all__ = [
    "SqlRecordStore",
    "create_db_engine",
    "kind_for_table",
    "reflect_kinds",
    "reflect_tables",
    "sqlite_url",
]
