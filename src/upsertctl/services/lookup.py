"""Lookup stage — resolve selectors, ask the store once, tag the outcome."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from upsertctl.domain.outcomes import (
    Err,
    Found,
    NotFound,
    ambiguous_match,
    invalid_record,
    unknown_kind,
)
from upsertctl.domain.records import RecordLike
from upsertctl.domain.selectors import resolve
from upsertctl.domain.store import AmbiguousMatchError, UnknownKindError

if TYPE_CHECKING:
    from upsertctl.domain.outcomes import LookupOutcome
    from upsertctl.domain.selectors import Selectors
    from upsertctl.domain.store import RecordStore

logger = logging.getLogger(__name__)


def find_by(record: Any, selectors: Selectors, store: RecordStore) -> LookupOutcome:
    """Look up the stored record matching *record* on *selectors*.

    Returns:
        ``Found(existing, candidate=record)`` on one match,
        ``NotFound(record)`` (the very object passed in) on none, or an
        ``Err``: resolver errors unchanged, ``AMBIGUOUS_MATCH`` when the
        store reports more than one match, ``INVALID_RECORD`` when the store
        does not hold the record's kind.
    """
    criteria = resolve(record, selectors)
    if isinstance(criteria, Err):
        logger.debug("find_by rejected: %s", criteria.code)
        return criteria

    kind = record.kind
    try:
        found = store.get_by(kind, criteria)
    except AmbiguousMatchError as exc:
        logger.debug("find_by %s ambiguous: %d matches for %r", kind.name, exc.count, criteria)
        return ambiguous_match(kind.name, criteria, exc.count)
    except UnknownKindError as exc:
        logger.debug("find_by %s: kind unknown to store", kind.name)
        return unknown_kind(exc.kind, exc.known)

    if found is None:
        logger.debug("find_by %s not found: %r", kind.name, criteria)
        return NotFound(record)

    logger.debug("find_by %s found: %r", kind.name, criteria)
    return Found(found, candidate=record)


def find(record: Any, store: RecordStore) -> LookupOutcome:
    """Look up *record* by its identifying key.

    A record whose identity is unset (or whose kind has no identity field)
    cannot match anything, so it comes back as ``NotFound`` without a
    store call. Never yields ``MISSING_SELECTORS``.
    """
    if not isinstance(record, RecordLike):
        return invalid_record(
            "find requires a record with an identity field",
            received=type(record).__name__,
        )

    identity = record.kind.identity
    if not record.has_field(identity) or record.get(identity) is None:
        logger.debug("find %s: identity %r absent, forcing not found", record.kind.name, identity)
        return NotFound(record)
    return find_by(record, [identity], store)
