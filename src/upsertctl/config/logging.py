"""structlog configuration for upsertctl.

Every record goes through one stderr handler on the root logger, rendered
for humans by default or as JSON lines with ``--log-json``. Stage modules
log with plain ``logging.getLogger(__name__)``; the handler's
``foreign_pre_chain`` gives those lines the same structured fields.

SQL statements are logged through the same handler when ``[store] echo``
is on, instead of SQLAlchemy's own echo handler.
"""

from __future__ import annotations

import logging
import sys

import structlog

APP_LOGGER = "upsertctl"
SQL_LOGGER = "sqlalchemy.engine"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(log_json: bool, pre_chain: list[structlog.types.Processor]) -> logging.Handler:
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    sql_echo: bool = False,
) -> None:
    """Route upsertctl and SQLAlchemy logging to one structured stderr handler.

    Args:
        verbose: Log lookup outcomes and write modes (DEBUG). Otherwise only
            WARNING and above.
        log_json: Render JSON lines instead of console output.
        sql_echo: Log each SQL statement (``sqlalchemy.engine`` at INFO),
            independent of *verbose*.
    """
    processors = _shared_processors()
    structlog.configure(
        processors=[*processors, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(_stderr_handler(log_json, processors))
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger(SQL_LOGGER).setLevel(logging.INFO if sql_echo else logging.WARNING)
