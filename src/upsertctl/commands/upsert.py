"""Command: update the matching row with the candidate's fields, or insert it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from upsertctl.commands._base import UpsertCommand, record_options

if TYPE_CHECKING:
    from upsertctl.commands._context import AppContext


@click.command(
    cls=UpsertCommand,
    examples="""\
  upsertctl upsert users --set name=Dumbledore
  upsertctl upsert users --set id=1 --set name=Albus
  upsertctl upsert users --by last_name --set first_name=Harry --set last_name=Potter
  upsertctl upsert users --set id=1 --set nickname=null""",
)
@record_options
@click.pass_obj
def upsert(
    app: AppContext,
    table: str,
    selectors: tuple[str, ...],
    assignments: tuple[str, ...],
) -> None:
    """Merge the candidate into the matching TABLE row, or insert it.

    Only fields given with --set are written; the row's other fields
    keep their stored values. Without --by the primary key selects, and
    a candidate without one is always inserted.
    """
    op = "upsert_by" if selectors else "upsert"
    record = app.build_record(op, table, assignments)
    app.emit(app.service.upsert_result(record, list(selectors)))
