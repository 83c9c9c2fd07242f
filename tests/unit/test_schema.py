from __future__ import annotations

from typing import Any

import pytest

from student_orm.config import SchemaMode
from student_orm.exceptions import SchemaValidationError
from student_orm.infrastructure import schema as schema_module
from student_orm.infrastructure.schema import column_type, synchronize_schema
from student_orm.mapping import STUDENT_MAPPING

ALL_COLUMNS = ["id", "name", "dob", "student_group"]


class _FakeCursor:
    def __init__(self, conn: _FakeConnection) -> None:
        self._conn = conn

    def __enter__(self) -> _FakeCursor:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        del exc_type, exc, tb
        return False

    def execute(self, query: Any, params: Any = None) -> None:
        self._conn.executed.append((query, params))

    def fetchall(self) -> list[tuple[str]]:
        return [(name,) for name in self._conn.present_columns]


class _FakeConnection:
    def __init__(self, present_columns: list[str]) -> None:
        self.present_columns = present_columns
        self.executed: list[tuple[Any, Any]] = []

    def cursor(self) -> _FakeCursor:
        return _FakeCursor(self)


def _columns_by_attribute() -> dict:
    return {c.attribute: c for c in STUDENT_MAPPING.persisted_columns}


def test_column_types_follow_codecs():
    columns = _columns_by_attribute()

    assert column_type(columns["id"]) == "INTEGER GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY"
    assert column_type(columns["name"]) == "TEXT"
    assert column_type(columns["date_of_birth"]) == "DATE"
    # widest of LOTUS / ROSE / DAISY
    assert column_type(columns["group"]) == "VARCHAR(5)"


def test_create_mode_drops_and_recreates():
    conn = _FakeConnection(present_columns=ALL_COLUMNS)

    created = synchronize_schema(conn, STUDENT_MAPPING, SchemaMode.CREATE)

    assert created == ALL_COLUMNS
    assert len(conn.executed) == 2


def test_update_mode_creates_missing_table(monkeypatch: pytest.MonkeyPatch):
    conn = _FakeConnection(present_columns=[])
    statements = []
    monkeypatch.setattr(
        schema_module, "create_table_statement", lambda mapping: statements.append(mapping) or "DDL"
    )

    created = synchronize_schema(conn, STUDENT_MAPPING, "update")

    assert created == ALL_COLUMNS
    assert statements == [STUDENT_MAPPING]
    assert conn.executed[-1] == ("DDL", None)


def test_update_mode_adds_only_missing_columns():
    conn = _FakeConnection(present_columns=["id", "name"])

    added = synchronize_schema(conn, STUDENT_MAPPING, SchemaMode.UPDATE)

    assert added == ["dob", "student_group"]
    # one lookup plus one ALTER per missing column
    assert len(conn.executed) == 3


def test_update_mode_without_changes_is_noop():
    conn = _FakeConnection(present_columns=ALL_COLUMNS)

    assert synchronize_schema(conn, STUDENT_MAPPING, SchemaMode.UPDATE) == []
    assert len(conn.executed) == 1


def test_update_mode_refuses_table_without_primary_key():
    conn = _FakeConnection(present_columns=["name", "dob"])

    with pytest.raises(SchemaValidationError) as excinfo:
        synchronize_schema(conn, STUDENT_MAPPING, SchemaMode.UPDATE)

    assert excinfo.value.missing_columns == ["id"]


def test_validate_mode_passes_on_matching_table():
    conn = _FakeConnection(present_columns=ALL_COLUMNS + ["legacy"])

    assert synchronize_schema(conn, STUDENT_MAPPING, SchemaMode.VALIDATE) == []
    assert conn.executed[0][1] == ("student",)


def test_validate_mode_reports_missing_columns():
    conn = _FakeConnection(present_columns=["id", "name"])

    with pytest.raises(SchemaValidationError) as excinfo:
        synchronize_schema(conn, STUDENT_MAPPING, SchemaMode.VALIDATE)

    assert excinfo.value.missing_columns == ["dob", "student_group"]


def test_validate_mode_reports_missing_table():
    conn = _FakeConnection(present_columns=[])

    with pytest.raises(SchemaValidationError, match="does not exist"):
        synchronize_schema(conn, STUDENT_MAPPING, SchemaMode.VALIDATE)
