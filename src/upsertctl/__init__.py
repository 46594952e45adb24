"""upsertctl — find-or-create and upsert as composable primitives."""

from upsertctl.domain.outcomes import Err, ErrorCode, Found, NotFound, Ok
from upsertctl.domain.records import Record, RecordKind
from upsertctl.domain.selectors import resolve
from upsertctl.domain.store import AmbiguousMatchError, RecordStore
from upsertctl.services.compose import or_create, update_or_insert
from upsertctl.services.conditionals import (
    ConditionalService,
    find_or_create,
    find_or_create_by,
    upsert,
    upsert_by,
)
from upsertctl.services.lookup import find, find_by

__version__ = "0.1.0"

__all__ = [
    "AmbiguousMatchError",
    "ConditionalService",
    "Err",
    "ErrorCode",
    "Found",
    "NotFound",
    "Ok",
    "Record",
    "RecordKind",
    "RecordStore",
    "__version__",
    "find",
    "find_by",
    "find_or_create",
    "find_or_create_by",
    "or_create",
    "resolve",
    "update_or_insert",
    "upsert",
    "upsert_by",
]
