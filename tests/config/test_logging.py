"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog
from sqlalchemy import text
from sqlalchemy.engine import Engine

from upsertctl.config.logging import configure_logging
from upsertctl.infrastructure.memory import MemoryStore
from upsertctl.services.conditionals import find_or_create_by
from tests.conftest import User


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    app = logging.getLogger("upsertctl")
    app_level = app.level
    sqla = logging.getLogger("sqlalchemy")
    sqla_level = sqla.level
    sql_engine = logging.getLogger("sqlalchemy.engine")
    sql_engine_level = sql_engine.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    app.setLevel(app_level)
    sqla.setLevel(sqla_level)
    sql_engine.setLevel(sql_engine_level)


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("upsertctl").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("upsertctl").level == logging.WARNING

    def test_human_mode_output(self) -> None:
        configure_logging(verbose=True, log_json=False)
        log = structlog.get_logger("upsertctl.test")
        log.warning("hello world", key="val")

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("upsertctl.test")
        log.warning("json test", answer=42)
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "upsertctl.test"
        assert "timestamp" in parsed

    def test_stage_debug_lines_are_structured(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)

        find_or_create_by(User(name="Harry"), ["name"], MemoryStore())

        lines = [json.loads(line) for line in capfd.readouterr().err.splitlines() if line]
        loggers = {line["logger"] for line in lines}
        assert "upsertctl.services.lookup" in loggers
        assert "upsertctl.infrastructure.memory" in loggers
        assert all(line["level"] == "debug" for line in lines)

    def test_stage_debug_silent_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True)
        find_or_create_by(User(name="Harry"), ["name"], MemoryStore())
        assert capfd.readouterr().err == ""

    def test_sqlalchemy_debug_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("sqlalchemy.engine").info("SELECT 1")
        assert capfd.readouterr().err == ""

    def test_verbose_does_not_echo_sql(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_sql_echo_is_structured(
        self, db_engine: Engine, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(log_json=True, sql_echo=True)
        with db_engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        lines = [json.loads(line) for line in capfd.readouterr().err.splitlines() if line]
        assert any(line["event"] == "SELECT 1" for line in lines)
        assert all(line["logger"].startswith("sqlalchemy.engine") for line in lines)

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=False)
        configure_logging(verbose=True)
        assert len(logging.getLogger().handlers) == 1
