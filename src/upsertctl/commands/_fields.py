"""Parse ``--set FIELD=VALUE`` pairs into typed record values."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import click

if TYPE_CHECKING:
    from sqlalchemy import Table

NULL_LITERAL = "null"


def parse_assignments(assignments: tuple[str, ...]) -> dict[str, str]:
    """Split ``FIELD=VALUE`` strings; later assignments win.

    Raises:
        click.BadParameter: On an item without ``=`` or with an empty field.
    """
    values: dict[str, str] = {}
    for item in assignments:
        name, sep, raw = item.partition("=")
        name = name.strip()
        if not sep or not name:
            msg = f"Expected FIELD=VALUE, got {item!r}"
            raise click.BadParameter(msg, param_hint="--set")
        values[name] = raw
    return values


def coerce_values(table: Table, raw: dict[str, str]) -> dict[str, Any]:
    """Convert raw strings using each column's Python type where known.

    ``null`` becomes None. Fields the table lacks are passed through so
    record construction can reject them.

    Raises:
        click.BadParameter: When a value cannot be converted.
    """
    values: dict[str, Any] = {}
    for name, text in raw.items():
        if text == NULL_LITERAL:
            values[name] = None
            continue
        column = table.c.get(name)
        values[name] = text if column is None else _coerce(column.type, name, text)
    return values


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    raise ValueError(text)


_CONVERTERS: dict[type, Any] = {
    bool: _parse_bool,
    int: int,
    float: float,
    Decimal: Decimal,
    date: date.fromisoformat,
    datetime: datetime.fromisoformat,
}


def _coerce(column_type: Any, name: str, text: str) -> Any:
    try:
        python_type = column_type.python_type
    except NotImplementedError:
        return text

    convert = _CONVERTERS.get(python_type)
    if convert is None:
        return text
    try:
        return convert(text)
    except (ValueError, ArithmeticError) as exc:
        msg = f"{text!r} is not a valid {python_type.__name__} for field {name!r}"
        raise click.BadParameter(msg, param_hint="--set") from exc
