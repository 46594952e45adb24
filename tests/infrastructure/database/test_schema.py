"""Tests for table-to-kind mapping and reflection."""

from sqlalchemy import Column, Integer, MetaData, Table, Text
from sqlalchemy.engine import Engine

from upsertctl.infrastructure.database.schema import (
    NO_IDENTITY,
    kind_for_table,
    reflect_kinds,
    reflect_tables,
)
from tests.conftest import USER_FIELDS, users_table


def _enrollments(metadata: MetaData) -> Table:
    return Table(
        "enrollments",
        metadata,
        Column("user_id", Integer, primary_key=True),
        Column("house", Text, primary_key=True),
        Column("year", Integer),
    )


class TestKindForTable:
    def test_single_column_pk_is_identity(self) -> None:
        kind = kind_for_table(users_table)
        assert kind.name == "users"
        assert kind.fields == USER_FIELDS
        assert kind.identity == "id"

    def test_composite_pk_has_no_identity(self) -> None:
        kind = kind_for_table(_enrollments(MetaData()))
        assert kind.identity == NO_IDENTITY
        assert kind.has_identity is False

    def test_non_id_primary_key(self) -> None:
        table = Table("houses", MetaData(), Column("slug", Text, primary_key=True))
        assert kind_for_table(table).identity == "slug"


class TestReflection:
    def test_reflect_tables(self, db_engine: Engine) -> None:
        tables = reflect_tables(db_engine)
        assert list(tables) == ["users"]
        assert tables["users"].columns.keys() == list(USER_FIELDS)

    def test_reflect_only(self, db_engine: Engine) -> None:
        metadata = MetaData()
        _enrollments(metadata)
        metadata.create_all(db_engine)
        assert list(reflect_tables(db_engine, only=["enrollments"])) == ["enrollments"]

    def test_reflect_kinds(self, db_engine: Engine) -> None:
        kinds = reflect_kinds(db_engine)
        assert kinds["users"] == kind_for_table(users_table)
