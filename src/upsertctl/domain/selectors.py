"""Selector resolution — record + field names → lookup criteria.

Pure function, no store access.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeAlias

from upsertctl.domain.outcomes import Err, invalid_record, missing_selectors
from upsertctl.domain.records import RecordLike

Selectors: TypeAlias = str | Sequence[str | None] | None
SelectorMapping: TypeAlias = dict[str, Any]


def normalize_selectors(selectors: Selectors) -> list[str]:
    """Wrap a bare field name in a list; drop None entries from sequences.

    Examples:
        >>> normalize_selectors("name")
        ['name']
        >>> normalize_selectors(("first_name", "last_name"))
        ['first_name', 'last_name']
        >>> normalize_selectors(["name", None])
        ['name']
        >>> normalize_selectors(None)
        []
    """
    if selectors is None:
        return []
    if isinstance(selectors, str):
        return [selectors]
    return [name for name in selectors if name is not None]


def resolve(record: Any, selectors: Selectors) -> SelectorMapping | Err:
    """Materialize the ``{field: value}`` criteria for *selectors* on *record*.

    Fields whose value is None or unset are left out of the mapping: a
    missing value is "not part of the criteria", not "match null". The
    mapping may come back empty; deciding what an empty lookup matches is
    the store's business.

    Returns:
        The criteria mapping, or an ``Err`` with ``MISSING_SELECTORS`` when
        *selectors* is None, empty or all None, or ``INVALID_RECORD`` when *record* is
        not a record or a selector names a field its kind does not define.
    """
    names = normalize_selectors(selectors)
    if not names:
        return missing_selectors()

    if not isinstance(record, RecordLike):
        return invalid_record(
            "find_by requires a record and a list of selectors",
            received=type(record).__name__,
        )

    undefined = [name for name in names if not record.has_field(name)]
    if undefined:
        return invalid_record(
            f"Kind {record.kind.name!r} does not define selector field(s): "
            f"{', '.join(undefined)}",
            kind=record.kind.name,
            fields=undefined,
        )

    mapping: SelectorMapping = {}
    for name in names:
        value = record.get(name)
        if value is not None and name not in mapping:
            mapping[name] = value
    return mapping
