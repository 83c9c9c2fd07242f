from __future__ import annotations

from datetime import date
from typing import Any, Optional

import pytest
from psycopg import errors

from student_orm.domain.models import StudentGroup, StudentRecord
from student_orm.exceptions import EncodingError, ValidationError
from student_orm.infrastructure.student_repository import StudentRepository
from student_orm.mapping import IdStrategy, student_mapper

GENERATED_ID = 11


class _FakeCursor:
    def __init__(self, conn: _FakeConnection, row_factory: Any = None) -> None:
        self._conn = conn
        self.row_factory = row_factory

    def __enter__(self) -> _FakeCursor:
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        del exc_type, exc, tb
        return False

    def execute(self, query: Any, params: Any = None) -> None:
        if self._conn.fail_with is not None:
            raise self._conn.fail_with
        self._conn.executed.append((query, params))

    def fetchone(self) -> Optional[Any]:
        return self._conn.next_row


class _FakeConnection:
    def __init__(self, next_row: Any = None, fail_with: Optional[Exception] = None) -> None:
        self.next_row = next_row
        self.fail_with = fail_with
        self.executed: list[tuple[Any, Any]] = []
        self.row_factories: list[Any] = []

    def cursor(self, row_factory: Any = None) -> _FakeCursor:
        self.row_factories.append(row_factory)
        return _FakeCursor(self, row_factory)


def _lee(**overrides) -> StudentRecord:
    values = {"name": "Lee", "date_of_birth": date(1999, 1, 1), "group": StudentGroup.DAISY}
    values.update(overrides)
    return StudentRecord(**values)


def test_persist_store_assigned_returns_generated_id():
    conn = _FakeConnection(next_row=(GENERATED_ID,))
    repo = StudentRepository(conn)
    record = _lee(transient_note="kept in memory")

    stored = repo.persist(record)

    assert stored.id == GENERATED_ID
    assert stored.transient_note == "kept in memory"
    assert record.id is None
    (_, params), = conn.executed
    assert params == ["Lee", date(1999, 1, 1), "DAISY"]


def test_persist_caller_assigned_sends_identifier():
    conn = _FakeConnection(next_row=(1,))
    repo = StudentRepository(conn, student_mapper(IdStrategy.CALLER_ASSIGNED))

    stored = repo.persist(_lee(id=1, name="Jack", date_of_birth=date(2000, 1, 1), group=StudentGroup.ROSE))

    assert stored.id == 1
    assert conn.executed[0][1] == [1, "Jack", date(2000, 1, 1), "ROSE"]


def test_persist_mapping_failure_sends_nothing():
    conn = _FakeConnection(next_row=(1,))
    repo = StudentRepository(conn, student_mapper(IdStrategy.CALLER_ASSIGNED))

    with pytest.raises(ValidationError):
        repo.persist(_lee())

    bad = _lee(id=2)
    bad.group = "TULIP"
    with pytest.raises(EncodingError):
        repo.persist(bad)

    assert conn.executed == []


def test_persist_propagates_unique_violation():
    conn = _FakeConnection(fail_with=errors.UniqueViolation("duplicate key value"))
    repo = StudentRepository(conn, student_mapper(IdStrategy.CALLER_ASSIGNED))

    with pytest.raises(errors.UniqueViolation):
        repo.persist(_lee(id=1))


def test_find_decodes_row():
    conn = _FakeConnection(
        next_row={"id": 1, "name": "Jack", "dob": date(2000, 1, 1), "student_group": "ROSE"}
    )
    repo = StudentRepository(conn)

    student = repo.find(1)

    assert student == StudentRecord(
        id=1, name="Jack", date_of_birth=date(2000, 1, 1), group=StudentGroup.ROSE
    )
    assert conn.executed[0][1] == (1,)
    assert conn.row_factories[0] is not None


def test_find_returns_none_when_absent():
    repo = StudentRepository(_FakeConnection(next_row=None))

    assert repo.find(404) is None
