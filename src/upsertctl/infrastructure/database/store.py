"""SqlRecordStore — RecordStore over SQLAlchemy Core tables.

Each store call runs on its own short-lived connection: reads use
``engine.connect()``, writes ``engine.begin()`` so an update-then-insert
fallback commits or rolls back as one unit. Driver errors raised while
writing are reported as ``STORE_WRITE_FAILURE`` values; read errors
propagate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, insert, select, update
from sqlalchemy.exc import DBAPIError

from upsertctl.domain.outcomes import Ok, write_failure
from upsertctl.domain.records import Record
from upsertctl.domain.store import AmbiguousMatchError, UnknownKindError
from upsertctl.infrastructure.database.schema import kind_for_table, reflect_tables

if TYPE_CHECKING:
    from sqlalchemy import Connection, Table
    from sqlalchemy.engine import Engine

    from upsertctl.domain.outcomes import PersistenceResult
    from upsertctl.domain.records import RecordKind, RecordLike

logger = logging.getLogger(__name__)


class SqlRecordStore:
    """Route record kinds to tables by name.

    Args:
        engine: Engine for the target database.
        tables: Tables this store may touch. When omitted, every table in
            the database is reflected.
    """

    def __init__(
        self,
        engine: Engine,
        tables: Iterable[Table] | Mapping[str, Table] | None = None,
    ) -> None:
        self._engine = engine
        if tables is None:
            resolved = reflect_tables(engine)
        elif isinstance(tables, Mapping):
            resolved = dict(tables)
        else:
            resolved = {table.name: table for table in tables}
        self._tables: dict[str, Table] = resolved
        self._kinds: dict[str, RecordKind] = {
            name: kind_for_table(table) for name, table in resolved.items()
        }

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def kinds(self) -> dict[str, RecordKind]:
        """Record kind per table name."""
        return dict(self._kinds)

    def kind(self, name: str) -> RecordKind:
        """Record kind for table *name*.

        Raises:
            UnknownKindError: If the store has no such table.
        """
        try:
            return self._kinds[name]
        except KeyError:
            raise UnknownKindError(name, sorted(self._kinds)) from None

    def table(self, name: str) -> Table:
        self.kind(name)
        return self._tables[name]

    def count(self, kind: RecordKind) -> int:
        """Number of rows in *kind*'s table."""
        stmt = select(func.count()).select_from(self.table(kind.name))
        with self._engine.connect() as conn:
            return int(conn.execute(stmt).scalar_one())

    # ── RecordStore ──────────────────────────────────────────────────

    def get_by(self, kind: RecordKind, criteria: dict[str, Any]) -> Record | None:
        """Select the single row matching every criterion.

        Empty criteria match nothing rather than the whole table.
        """
        table = self.table(kind.name)
        if not criteria:
            return None

        conditions = [table.c[name] == value for name, value in criteria.items()]
        stmt = select(table).where(*conditions).limit(2)

        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
            if len(rows) > 1:
                total = conn.execute(
                    select(func.count()).select_from(table).where(*conditions)
                ).scalar_one()
                raise AmbiguousMatchError(kind.name, criteria, int(total))

        if not rows:
            return None
        return Record(self.kind(kind.name), dict(rows[0]))

    def insert(self, record: RecordLike) -> PersistenceResult:
        kind = self.kind(record.kind.name)
        table = self._tables[kind.name]
        values = _write_values(kind, record)
        try:
            with self._engine.begin() as conn:
                stored = self._insert_on(conn, kind, table, values)
        except DBAPIError as exc:
            return _failure(kind, exc, "insert")
        logger.debug("sql insert %s %r", kind.name, stored.identity)
        return Ok(stored)

    def insert_or_update(self, record: RecordLike) -> PersistenceResult:
        """UPDATE by identity when it is set, INSERT otherwise or when no row was updated."""
        kind = self.kind(record.kind.name)
        table = self._tables[kind.name]
        values = _write_values(kind, record)
        identity = values.get(kind.identity) if kind.has_identity else None
        if identity is None:
            return self.insert(record)

        changes = {name: value for name, value in values.items() if name != kind.identity}
        key = table.c[kind.identity]
        try:
            with self._engine.begin() as conn:
                if changes:
                    matched = conn.execute(
                        update(table).where(key == identity).values(**changes)
                    ).rowcount
                else:
                    matched = conn.execute(
                        select(func.count()).select_from(table).where(key == identity)
                    ).scalar_one()

                if matched:
                    stored = self._read_on(conn, kind, table, identity)
                    mode = "update"
                else:
                    stored = self._insert_on(conn, kind, table, values)
                    mode = "insert"
        except DBAPIError as exc:
            return _failure(kind, exc, "insert_or_update")
        logger.debug("sql %s %s %r", mode, kind.name, identity)
        return Ok(stored)

    # ── Internals ────────────────────────────────────────────────────

    def _insert_on(
        self,
        conn: Connection,
        kind: RecordKind,
        table: Table,
        values: dict[str, Any],
    ) -> Record:
        stmt = insert(table)
        if values:
            stmt = stmt.values(**values)
        result = conn.execute(stmt)
        if not kind.has_identity:
            return Record(kind, values)
        identity = values.get(kind.identity)
        if identity is None:
            identity = result.inserted_primary_key[0]
        return self._read_on(conn, kind, table, identity)

    def _read_on(self, conn: Connection, kind: RecordKind, table: Table, identity: Any) -> Record:
        stmt = select(table).where(table.c[kind.identity] == identity)
        row = conn.execute(stmt).mappings().one()
        return Record(kind, dict(row))


def _write_values(kind: RecordKind, record: RecordLike) -> dict[str, Any]:
    """Carried fields to write; an explicit None identity is left to the database."""
    values = record.carried()
    if kind.has_identity and kind.identity in values and values[kind.identity] is None:
        del values[kind.identity]
    return values


def _failure(kind: RecordKind, exc: DBAPIError, op: str) -> PersistenceResult:
    reason = str(exc.orig) if exc.orig is not None else str(exc)
    logger.debug("sql %s %s rejected: %s", op, kind.name, reason)
    return write_failure(kind.name, reason, op=op, error=type(exc).__name__)
