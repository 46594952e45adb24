"""Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from upsertctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from upsertctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()
    if result.ok:
        _render_record(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode: the record identity, or the error."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    record = result.data.get("record") or {}
    if result.data.get("found") is False:
        return ""
    identity = record.get(result.data.get("identity", "id"))
    return str(identity) if identity is not None else f"OK: {result.op}"


# ── Renderers ─────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="upsert.ok")
    op = Text(f"  {result.op}", style="upsert.op")
    kind = Text(f"  {result.data.get('kind', '')}", style="upsert.kind")
    console.print(label, op, kind, end="")
    found = result.data.get("found")
    if found is True:
        console.print(Text("  found", style="upsert.found"), end="")
    elif found is False:
        console.print(Text("  not found", style="upsert.missing"), end="")
    console.print()


def _render_record(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    record: dict[str, Any] = result.data.get("record") or {}
    if record:
        console.print(_record_table(record, identity=result.data.get("identity", "id")))
    if verbose and result.meta:
        console.print(Text("  meta:", style="dim"))
        for k, v in result.meta.items():
            console.print(f"    {k}: {v}")


def _record_table(record: dict[str, Any], *, identity: str) -> Table:
    table = Table(show_header=False, box=None, pad_edge=False, padding=(0, 2))
    table.add_column("field", style="upsert.key", no_wrap=True)
    table.add_column("value")
    for key, value in record.items():
        if value is None:
            table.add_row(key, Text("null", style="upsert.null"))
        elif key == identity:
            table.add_row(key, Text(str(value), style="upsert.id"))
        else:
            table.add_row(key, str(value))
    return table


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="upsert.error")
    op = Text(f"  {result.op}", style="upsert.op")
    code = Text(f"  [{err.code}]" if err else "", style="upsert.key")
    console.print(label, op, code, Text(" — "), msg)

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")
