"""Outcome composer — turn a tagged lookup outcome into a write (or not).

Both strategies are total over lookup outcomes. An ``Err`` coming in is
returned as-is; neither strategy retries or recovers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from upsertctl.domain.outcomes import Err, Found, NotFound, Ok, invalid_record, unknown_kind
from upsertctl.domain.records import Record
from upsertctl.domain.store import UnknownKindError

if TYPE_CHECKING:
    from upsertctl.domain.outcomes import PersistenceResult
    from upsertctl.domain.records import RecordLike
    from upsertctl.domain.store import RecordStore

logger = logging.getLogger(__name__)


def or_create(outcome: Any, store: RecordStore) -> PersistenceResult:
    """Create-if-absent.

    ``Found`` → ``Ok(existing)`` with no write; ``NotFound`` → the store's
    ``insert`` result for the candidate.
    """
    match outcome:
        case Found(record=existing):
            return Ok(existing)
        case NotFound(record=candidate):
            return _write("insert", store.insert, candidate)
        case Err():
            return outcome
    return _not_an_outcome(outcome)


def update_or_insert(outcome: Any, store: RecordStore) -> PersistenceResult:
    """Merge the candidate onto what was found (or onto a blank) and write it.

    ``Found`` → the matched record overlaid with the candidate's carried
    fields, keeping the matched record's identity; ``NotFound`` → a blank
    record of the candidate's kind overlaid the same way. Either way the
    store's ``insert_or_update`` picks the write mode.
    """
    match outcome:
        case Found(record=existing, candidate=candidate):
            merged = existing if candidate is None else _onto_match(existing, candidate)
        case NotFound(record=candidate):
            merged = candidate.kind.blank().merge(candidate)
        case Err():
            return outcome
        case _:
            return _not_an_outcome(outcome)

    return _write("insert_or_update", store.insert_or_update, merged)


def _onto_match(existing: RecordLike, candidate: RecordLike) -> RecordLike:
    # The update targets the matched row; a candidate identity is dropped.
    identity = existing.kind.identity
    overlay = {name: value for name, value in candidate.carried().items() if name != identity}
    if identity in candidate.carried() and candidate.get(identity) != existing.get(identity):
        logger.debug(
            "update_or_insert %s: ignoring candidate %s %r, matched %r",
            existing.kind.name,
            identity,
            candidate.get(identity),
            existing.get(identity),
        )
    return existing.merge(Record(candidate.kind, overlay))


def _write(mode: str, write: Any, record: RecordLike) -> PersistenceResult:
    kind = record.kind.name
    try:
        result = write(record)
    except UnknownKindError as exc:
        logger.debug("%s %s: kind unknown to store", mode, kind)
        return unknown_kind(exc.kind, exc.known)

    if isinstance(result, Err):
        logger.debug("%s %s failed: %s %s", mode, kind, result.code, result.message)
    else:
        logger.debug("%s %s ok", mode, kind)
    return result


def _not_an_outcome(value: Any) -> Err:
    return invalid_record(
        "Expected a Found, NotFound, or Err lookup outcome",
        received=type(value).__name__,
    )
