"""
Student repository: single-record write and read through the mapper.

The repository is thin glue around a caller-owned psycopg connection. It never
commits or rolls back; wrap calls in `conn.transaction()` or a connection
context manager to control boundaries.
"""

from __future__ import annotations

from typing import Optional

from psycopg import Connection, errors, sql
from psycopg.rows import dict_row

from student_orm.domain.models import StudentRecord
from student_orm.mapping.mapper import Mapper
from student_orm.mapping.student import student_mapper
from student_orm.utils.logging import get_logger

log = get_logger(__name__)


class StudentRepository:
    """
    Persist and look up students in the mapped table.

    Parameters
    ----------
    conn : Connection
        An open psycopg connection; the repository does not close it.
    mapper : Mapper | None
        Mapper to use. Defaults to the student mapping with store-assigned ids.
    """

    def __init__(self, conn: Connection, mapper: Optional[Mapper] = None) -> None:
        self._conn = conn
        self._mapper = mapper or student_mapper()

    @property
    def mapper(self) -> Mapper:
        return self._mapper

    def persist(self, record: StudentRecord) -> StudentRecord:
        """
        Map `record` and insert it as a new row.

        Returns a copy of `record` carrying the identifier the row was stored
        under. Mapping errors are raised before anything is sent to the store;
        store errors such as `psycopg.errors.UniqueViolation` propagate unchanged.
        """
        mapping = self._mapper.mapping
        row = self._mapper.to_row(record)
        pk = mapping.primary_key.column
        query = sql.SQL("INSERT INTO {table} ({columns}) VALUES ({values}) RETURNING {pk}").format(
            table=sql.Identifier(mapping.table),
            columns=sql.SQL(", ").join(sql.Identifier(name) for name in row),
            values=sql.SQL(", ").join(sql.Placeholder() for _ in row),
            pk=sql.Identifier(pk),
        )

        try:
            with self._conn.cursor() as cur:
                cur.execute(query, list(row.values()))
                stored = cur.fetchone()
        except errors.UniqueViolation:
            log.warning(
                "Duplicate identifier rejected by store",
                extra={"table": mapping.table, "id": record.id},
            )
            raise

        student_id = stored[0]
        log.info("Student persisted", extra={"table": mapping.table, "id": student_id})
        return record.model_copy(update={"id": student_id})

    def find(self, student_id: int) -> Optional[StudentRecord]:
        """
        Read the student stored under `student_id`, or None when absent.

        The returned instance is new: fields excluded from the mapping are at
        their defaults.
        """
        mapping = self._mapper.mapping
        query = sql.SQL("SELECT {columns} FROM {table} WHERE {pk} = %s").format(
            columns=sql.SQL(", ").join(sql.Identifier(c.column) for c in mapping.persisted_columns),
            table=sql.Identifier(mapping.table),
            pk=sql.Identifier(mapping.primary_key.column),
        )
        with self._conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, (student_id,))
            row = cur.fetchone()

        if row is None:
            log.info("Student not found", extra={"table": mapping.table, "id": student_id})
            return None
        return self._mapper.from_row(row)


__all__ = ["StudentRepository"]
