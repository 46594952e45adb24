"""RecordStore — the one boundary the conditional core calls into.

The core never builds queries. It hands a kind and a selector mapping to
``get_by`` and a finished record to ``insert`` / ``insert_or_update``;
everything else (connections, SQL, constraints) belongs to the adapter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from upsertctl.domain.outcomes import PersistenceResult
    from upsertctl.domain.records import RecordKind, RecordLike


class AmbiguousMatchError(LookupError):
    """Raised by ``get_by`` when more than one record matches the criteria."""

    def __init__(self, kind: str, criteria: dict[str, Any], count: int) -> None:
        self.kind = kind
        self.criteria = criteria
        self.count = count
        super().__init__(f"{count} {kind!r} records match {criteria!r}")


class UnknownKindError(LookupError):
    """Raised by a store asked about a record kind it does not hold."""

    def __init__(self, kind: str, known: list[str]) -> None:
        self.kind = kind
        self.known = known
        super().__init__(f"Unknown kind {kind!r}. Known: {known}")


@runtime_checkable
class RecordStore(Protocol):
    """Structural contract for store adapters.

    INVARIANT: ``get_by`` returns None (never raises) on zero matches and
    raises :class:`AmbiguousMatchError` on more than one. Any call may raise
    :class:`UnknownKindError` for a kind the store does not hold. Writes report
    failures as ``Err`` values rather than raising.
    """

    def get_by(self, kind: RecordKind, criteria: dict[str, Any]) -> RecordLike | None: ...

    def insert(self, record: RecordLike) -> PersistenceResult: ...

    def insert_or_update(self, record: RecordLike) -> PersistenceResult: ...
