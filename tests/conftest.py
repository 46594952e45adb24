"""Shared pytest fixtures and test helpers for upsertctl tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy import Column, Integer, MetaData, Table, Text
from sqlalchemy.engine import Engine

from upsertctl.domain.outcomes import Ok
from upsertctl.domain.records import RecordKind
from upsertctl.infrastructure.database.engine import create_db_engine
from upsertctl.infrastructure.database.store import SqlRecordStore
from upsertctl.infrastructure.memory import MemoryStore

USER_FIELDS = ("id", "name", "first_name", "last_name", "email", "age")

User = RecordKind.define("users", USER_FIELDS)

metadata = MetaData()

users_table = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", Text),
    Column("first_name", Text),
    Column("last_name", Text),
    Column("email", Text, unique=True),
    Column("age", Integer),
)


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Undo handler and level changes made by CLI runs."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    levels = {name: logging.getLogger(name).level for name in ("upsertctl", "sqlalchemy.engine")}
    yield
    root.handlers = handlers
    root.setLevel(level)
    for name, saved in levels.items():
        logging.getLogger(name).setLevel(saved)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def memory_store() -> MemoryStore:
    """Empty in-memory store with a unique constraint on users.email."""
    return MemoryStore(unique={"users": [("email",)]})


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """SQLite engine on a temp file with the ``users`` table created."""
    engine = create_db_engine(tmp_path / "test.db")
    metadata.create_all(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sql_store(db_engine: Engine) -> SqlRecordStore:
    """SQL store bound to the ``users`` table."""
    return SqlRecordStore(db_engine, [users_table])


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest) -> Any:
    """Each store adapter in turn, for contract tests."""
    if request.param == "memory":
        return request.getfixturevalue("memory_store")
    return request.getfixturevalue("sql_store")


@pytest.fixture
def _isolated_workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """CWD with an ``upsertctl.toml`` pointing at a fresh ``school.db``.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.delenv("UPSERTCTL_CONFIG", raising=False)
    monkeypatch.delenv("UPSERTCTL_STORE__URL", raising=False)
    db_path = tmp_path / "school.db"
    engine = create_db_engine(db_path)
    metadata.create_all(engine)
    engine.dispose()
    (tmp_path / "upsertctl.toml").write_text(f'[store]\nurl = "sqlite:///{db_path}"\n')
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def seed(store: Any, **values: Any) -> Any:
    """Insert a user through *store*, asserting success."""
    result = store.insert(User(**values))
    assert isinstance(result, Ok), result
    return result.record


class RecordingStore:
    """Test double that records every call and serves canned lookups."""

    def __init__(self, found: Any = None, write_result: Any = None) -> None:
        self.found = found
        self.write_result = write_result
        self.calls: list[tuple[str, Any]] = []

    def get_by(self, kind: RecordKind, criteria: dict[str, Any]) -> Any:
        self.calls.append(("get_by", (kind.name, dict(criteria))))
        return self.found

    def insert(self, record: Any) -> Any:
        self.calls.append(("insert", record))
        return self.write_result if self.write_result is not None else Ok(record)

    def insert_or_update(self, record: Any) -> Any:
        self.calls.append(("insert_or_update", record))
        return self.write_result if self.write_result is not None else Ok(record)
