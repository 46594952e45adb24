"""Tagged outcomes threaded between the conditional stages.

Lookup outcomes (``Found`` / ``NotFound``) are produced by the lookup
stage; persistence results (``Ok`` / ``Err``) by anything that talks to
the store. ``Err`` doubles as the failure variant of both: once a stage
yields one, every downstream stage returns it unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from upsertctl.domain.records import RecordLike


class ErrorCode(StrEnum):
    """Failure kinds surfaced by the conditional stages."""

    MISSING_SELECTORS = "MISSING_SELECTORS"
    AMBIGUOUS_MATCH = "AMBIGUOUS_MATCH"
    STORE_WRITE_FAILURE = "STORE_WRITE_FAILURE"
    INVALID_RECORD = "INVALID_RECORD"
    UNKNOWN_KIND = "UNKNOWN_KIND"


@dataclass(frozen=True)
class Found:
    """An existing record matched the selectors.

    ``candidate`` is the record the lookup was made for; ``update_or_insert``
    merges it onto ``record``.
    """

    record: RecordLike
    candidate: RecordLike | None = None


@dataclass(frozen=True)
class NotFound:
    """Nothing matched; ``record`` is the original candidate, untouched."""

    record: RecordLike


@dataclass(frozen=True)
class Ok:
    """The store returned (or already held) ``record``."""

    record: RecordLike


@dataclass(frozen=True)
class Err:
    """A failed stage. ``detail`` carries adapter-specific context."""

    code: ErrorCode
    message: str
    detail: dict[str, Any] = field(default_factory=dict)


LookupOutcome: TypeAlias = Found | NotFound | Err
PersistenceResult: TypeAlias = Ok | Err


def missing_selectors() -> Err:
    return Err(
        code=ErrorCode.MISSING_SELECTORS,
        message="find_by requires a list of fields to select on",
    )


def invalid_record(message: str, **detail: Any) -> Err:
    return Err(code=ErrorCode.INVALID_RECORD, message=message, detail=detail)


def ambiguous_match(kind: str, criteria: dict[str, Any], count: int) -> Err:
    return Err(
        code=ErrorCode.AMBIGUOUS_MATCH,
        message=f"More than one {kind!r} record matches the selectors",
        detail={"kind": kind, "criteria": criteria, "count": count},
    )


def write_failure(kind: str, reason: str, **detail: Any) -> Err:
    return Err(
        code=ErrorCode.STORE_WRITE_FAILURE,
        message=f"Store rejected write to {kind!r}: {reason}",
        detail={"kind": kind, "reason": reason, **detail},
    )


def unknown_kind(kind: str, known: list[str]) -> Err:
    return invalid_record(
        f"Store does not hold records of kind {kind!r}",
        kind=kind,
        known=known,
    )
