"""Entry points — find-or-create and upsert as compositions of the stages.

::

    find_or_create_by = or_create        ∘ find_by
    find_or_create    = or_create        ∘ find
    upsert_by         = update_or_insert ∘ find_by
    upsert            = update_or_insert ∘ find

None of these hold logic of their own. :class:`ConditionalService`
binds a store once so callers can drop the trailing ``store`` argument.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from upsertctl.domain.selectors import normalize_selectors
from upsertctl.services.base import BaseService
from upsertctl.services.compose import or_create, update_or_insert
from upsertctl.services.lookup import find, find_by
from upsertctl.services.result import ServiceResult, from_outcome

if TYPE_CHECKING:
    from upsertctl.domain.outcomes import LookupOutcome, PersistenceResult
    from upsertctl.domain.selectors import Selectors
    from upsertctl.domain.store import RecordStore


def find_or_create_by(record: Any, selectors: Selectors, store: RecordStore) -> PersistenceResult:
    """Return the record matching *selectors*, inserting *record* if none does."""
    return or_create(find_by(record, selectors, store), store)


def find_or_create(record: Any, store: RecordStore) -> PersistenceResult:
    """Return the record with *record*'s identity, inserting *record* if none does."""
    return or_create(find(record, store), store)


def upsert_by(record: Any, selectors: Selectors, store: RecordStore) -> PersistenceResult:
    """Update the record matching *selectors* with *record*'s fields, or insert it."""
    return update_or_insert(find_by(record, selectors, store), store)


def upsert(record: Any, store: RecordStore) -> PersistenceResult:
    """Upsert by identity; an unset identity always inserts."""
    return update_or_insert(find(record, store), store)


class ConditionalService(BaseService):
    """The conditional primitives with the store pre-bound.

    Usage::

        users = ConditionalService(SqlRecordStore(engine, [users_table]))
        users.upsert_by(User(email="h@hogwarts.edu", name="Harry"), "email")

    The ``*_result`` variants wrap the outcome in a :class:`ServiceResult`
    for adapters that render or serialize it.
    """

    def find_by(self, record: Any, selectors: Selectors) -> LookupOutcome:
        return find_by(record, selectors, self._store)

    def find(self, record: Any) -> LookupOutcome:
        return find(record, self._store)

    def or_create(self, outcome: Any) -> PersistenceResult:
        return or_create(outcome, self._store)

    def update_or_insert(self, outcome: Any) -> PersistenceResult:
        return update_or_insert(outcome, self._store)

    def find_or_create_by(self, record: Any, selectors: Selectors) -> PersistenceResult:
        return find_or_create_by(record, selectors, self._store)

    def find_or_create(self, record: Any) -> PersistenceResult:
        return find_or_create(record, self._store)

    def upsert_by(self, record: Any, selectors: Selectors) -> PersistenceResult:
        return upsert_by(record, selectors, self._store)

    def upsert(self, record: Any) -> PersistenceResult:
        return upsert(record, self._store)

    # ── ServiceResult adapters ───────────────────────────────────────

    def find_result(self, record: Any, selectors: Selectors = None) -> ServiceResult:
        """``find_by`` when *selectors* are given, else ``find``."""
        if selectors:
            return from_outcome("find_by", self.find_by(record, selectors), meta=_meta(selectors))
        return from_outcome("find", self.find(record))

    def find_or_create_result(self, record: Any, selectors: Selectors = None) -> ServiceResult:
        """``find_or_create_by`` when *selectors* are given, else ``find_or_create``."""
        if selectors:
            return from_outcome(
                "find_or_create_by",
                self.find_or_create_by(record, selectors),
                meta=_meta(selectors),
            )
        return from_outcome("find_or_create", self.find_or_create(record))

    def upsert_result(self, record: Any, selectors: Selectors = None) -> ServiceResult:
        """``upsert_by`` when *selectors* are given, else ``upsert``."""
        if selectors:
            return from_outcome(
                "upsert_by",
                self.upsert_by(record, selectors),
                meta=_meta(selectors),
            )
        return from_outcome("upsert", self.upsert(record))


def _meta(selectors: Selectors) -> dict[str, Any]:
    return {"selectors": normalize_selectors(selectors)}
