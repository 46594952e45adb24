"""Bridge between SQLAlchemy ``Table`` objects and record kinds.

A table becomes a :class:`RecordKind` whose fields are its columns and
whose identity is its primary key. Composite or missing primary keys
leave the kind without an identity field (``find``/``upsert`` then
always insert).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import MetaData

from upsertctl.domain.records import RecordKind

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.engine import Engine

# Identity name used for tables without a single-column primary key.
# No column is named this way, so ``RecordKind.has_identity`` is False.
NO_IDENTITY = ""


def kind_for_table(table: Table) -> RecordKind:
    """Derive the record kind for *table*."""
    pk_columns = list(table.primary_key.columns)
    identity = pk_columns[0].name if len(pk_columns) == 1 else NO_IDENTITY
    return RecordKind.define(table.name, table.columns.keys(), identity=identity)


def reflect_tables(engine: Engine, *, only: list[str] | None = None) -> dict[str, Table]:
    """Reflect existing tables from the database behind *engine*.

    Args:
        only: Restrict reflection to these table names.

    Returns:
        ``{table name: Table}``.
    """
    metadata = MetaData()
    metadata.reflect(bind=engine, only=only)
    return dict(metadata.tables)


def reflect_kinds(engine: Engine) -> dict[str, RecordKind]:
    """Record kinds for every table in the database behind *engine*."""
    return {name: kind_for_table(table) for name, table in reflect_tables(engine).items()}
