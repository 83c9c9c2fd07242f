"""
Infrastructure package for the student ORM walkthrough.

Everything that talks to the relational store lives here: the connection
factory, schema synchronization and the student repository. The mapping layer
stays free of I/O.
"""

from student_orm.infrastructure.db_factory import (
    apply_statement_timeout,
    build_dsn,
    get_sync_connection,
    sync_connection,
)
from student_orm.infrastructure.schema import create_table_statement, synchronize_schema
from student_orm.infrastructure.student_repository import StudentRepository

__all__ = [
    "apply_statement_timeout",
    "build_dsn",
    "get_sync_connection",
    "sync_connection",
    "create_table_statement",
    "synchronize_schema",
    "StudentRepository",
]
