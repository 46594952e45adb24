"""Command: return the matching row, inserting the candidate when none matches."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from upsertctl.commands._base import UpsertCommand, record_options

if TYPE_CHECKING:
    from upsertctl.commands._context import AppContext


@click.command(
    "find-or-create",
    cls=UpsertCommand,
    examples="""\
  upsertctl find-or-create users --set id=1 --set name=Flamel
  upsertctl find-or-create users --by name --set name=Slughorn
  upsertctl -q find-or-create tags --by label --set label=potions""",
)
@record_options
@click.pass_obj
def find_or_create(
    app: AppContext,
    table: str,
    selectors: tuple[str, ...],
    assignments: tuple[str, ...],
) -> None:
    """Find the TABLE row matching the candidate, or insert the candidate."""
    op = "find_or_create_by" if selectors else "find_or_create"
    record = app.build_record(op, table, assignments)
    app.emit(app.service.find_or_create_result(record, list(selectors)))
