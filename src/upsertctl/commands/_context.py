"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy store initialization, candidate
record construction from CLI input, and centralized result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click

from upsertctl.domain.outcomes import ErrorCode
from upsertctl.domain.store import UnknownKindError
from upsertctl.output.formatters import OutputSettings, format_result
from upsertctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from upsertctl.config.settings import UpsertSettings
    from upsertctl.domain.records import Record
    from upsertctl.infrastructure.database.store import SqlRecordStore
    from upsertctl.services.conditionals import ConditionalService


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The store is lazily
    initialized on first use so ``--help`` and ``--version`` never
    touch the database.
    """

    def __init__(self, settings: UpsertSettings) -> None:
        self.settings = settings
        self._store: SqlRecordStore | None = None

        from upsertctl.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            sql_echo=settings.store.echo,
        )

    @property
    def store(self) -> SqlRecordStore:
        """The SQL store for ``[store] url`` (created lazily on first access)."""
        if self._store is None:
            from upsertctl.infrastructure.database.engine import create_db_engine
            from upsertctl.infrastructure.database.store import SqlRecordStore

            # SQL echo goes through configure_logging, not the engine.
            engine = create_db_engine(self.settings.store.url)
            self._store = SqlRecordStore(engine)
        return self._store

    @property
    def service(self) -> ConditionalService:
        from upsertctl.services.conditionals import ConditionalService

        return ConditionalService(self.store)

    def build_record(self, op: str, table: str, assignments: tuple[str, ...]) -> Record:
        """Candidate record for *table* from ``--set`` pairs.

        Emits an error result (exit 1) for an unknown table or a field the
        table does not define.
        """
        from upsertctl.commands._fields import coerce_values, parse_assignments

        raw = parse_assignments(assignments)
        try:
            kind = self.store.kind(table)
        except UnknownKindError:
            self.fail(
                op,
                ErrorCode.UNKNOWN_KIND,
                f"Unknown table {table!r}",
                known=sorted(self.store.kinds),
            )

        values = coerce_values(self.store.table(table), raw)
        try:
            return kind.new(**values)
        except ValueError as exc:
            self.fail(op, ErrorCode.INVALID_RECORD, str(exc), kind=table)

    def fail(self, op: str, code: ErrorCode, message: str, **detail: object) -> NoReturn:
        """Emit an error result; ``emit`` exits 1."""
        self.emit(
            ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code=str(code), message=message, detail=detail),
            )
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
