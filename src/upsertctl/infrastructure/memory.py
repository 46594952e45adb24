"""In-process RecordStore backed by plain dicts.

Useful for tests and for callers that want the conditional semantics
without a database. Identities are generated as increasing integers per
kind. Optional unique field groups behave like unique constraints: a
write that would duplicate one is rejected with ``STORE_WRITE_FAILURE``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from itertools import count
from typing import TYPE_CHECKING, Any

from upsertctl.domain.outcomes import Ok, write_failure
from upsertctl.domain.records import Record
from upsertctl.domain.store import AmbiguousMatchError

if TYPE_CHECKING:
    from upsertctl.domain.outcomes import PersistenceResult
    from upsertctl.domain.records import RecordKind, RecordLike

logger = logging.getLogger(__name__)


class MemoryStore:
    """Dict-backed store: ``{kind name: {identity: Record}}``.

    Args:
        unique: Per kind name, groups of fields whose combined values must
            be unique across stored records (e.g. ``{"users": [("email",)]}``).
    """

    def __init__(self, unique: Mapping[str, Iterable[Iterable[str]]] | None = None) -> None:
        self._rows: dict[str, dict[Any, Record]] = {}
        self._sequences: dict[str, count[int]] = {}
        self._unique: dict[str, list[tuple[str, ...]]] = {
            kind: [tuple(group) for group in groups] for kind, groups in (unique or {}).items()
        }

    # ── Introspection ────────────────────────────────────────────────

    def all(self, kind: RecordKind) -> list[Record]:
        """Every stored record of *kind*, in insertion order."""
        return list(self._rows.get(kind.name, {}).values())

    def count(self, kind: RecordKind) -> int:
        return len(self._rows.get(kind.name, {}))

    # ── RecordStore ──────────────────────────────────────────────────

    def get_by(self, kind: RecordKind, criteria: dict[str, Any]) -> Record | None:
        """Return the single record matching every criterion.

        Empty criteria match nothing.
        """
        if not criteria:
            return None
        matches = [
            row
            for row in self._rows.get(kind.name, {}).values()
            if all(row.get(name) == value for name, value in criteria.items())
        ]
        if len(matches) > 1:
            raise AmbiguousMatchError(kind.name, criteria, len(matches))
        return matches[0] if matches else None

    def insert(self, record: RecordLike) -> PersistenceResult:
        kind = record.kind
        rows = self._rows.setdefault(kind.name, {})
        stored = Record(kind, record.carried())

        if kind.has_identity:
            identity = stored.get(kind.identity)
            if identity is None:
                identity = self._next_identity(kind)
                stored = stored.replace(**{kind.identity: identity})
            elif identity in rows:
                return write_failure(
                    kind.name,
                    f"duplicate {kind.identity} {identity!r}",
                    fields=[kind.identity],
                )
        else:
            identity = object()

        conflict = self._unique_conflict(stored, ignore=None)
        if conflict is not None:
            return conflict

        rows[identity] = stored
        logger.debug("memory insert %s %r", kind.name, identity)
        return Ok(stored)

    def insert_or_update(self, record: RecordLike) -> PersistenceResult:
        """Update the row with the record's identity, or insert when there is none."""
        kind = record.kind
        identity = record.get(kind.identity) if kind.has_identity else None
        rows = self._rows.get(kind.name, {})
        if identity is None or identity not in rows:
            return self.insert(record)

        updated = rows[identity].merge(record)
        conflict = self._unique_conflict(updated, ignore=identity)
        if conflict is not None:
            return conflict

        rows[identity] = updated
        logger.debug("memory update %s %r", kind.name, identity)
        return Ok(updated)

    # ── Internals ────────────────────────────────────────────────────

    def _next_identity(self, kind: RecordKind) -> int:
        sequence = self._sequences.setdefault(kind.name, count(1))
        rows = self._rows.get(kind.name, {})
        identity = next(sequence)
        while identity in rows:
            identity = next(sequence)
        return identity

    def _unique_conflict(self, record: Record, *, ignore: Any) -> PersistenceResult | None:
        kind = record.kind
        for group in self._unique.get(kind.name, []):
            values = tuple(record.get(name) for name in group)
            if any(value is None for value in values):
                continue
            for identity, row in self._rows.get(kind.name, {}).items():
                if identity == ignore:
                    continue
                if tuple(row.get(name) for name in group) == values:
                    return write_failure(
                        kind.name,
                        f"unique constraint on ({', '.join(group)}) violated",
                        fields=list(group),
                    )
        return None
