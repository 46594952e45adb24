"""Command: look up a row without writing."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from upsertctl.commands._base import UpsertCommand, record_options

if TYPE_CHECKING:
    from upsertctl.commands._context import AppContext


@click.command(
    cls=UpsertCommand,
    examples="""\
  upsertctl find users --set id=4
  upsertctl find users --by first_name --by last_name \\
      --set first_name=Harry --set last_name=Potter
  upsertctl --json find users --by email --set email=h@hogwarts.edu""",
)
@record_options
@click.pass_obj
def find(
    app: AppContext,
    table: str,
    selectors: tuple[str, ...],
    assignments: tuple[str, ...],
) -> None:
    """Find the TABLE row matching the candidate on the selector fields."""
    op = "find_by" if selectors else "find"
    record = app.build_record(op, table, assignments)
    app.emit(app.service.find_result(record, list(selectors)))
