from __future__ import annotations

import sys
from datetime import date, datetime
from typing import List, NoReturn, Optional

import typer
from psycopg import errors

from student_orm.config import SchemaMode, get_settings
from student_orm.domain.models import StudentGroup, StudentRecord
from student_orm.exceptions import MappingError, SchemaValidationError
from student_orm.infrastructure.db_factory import sync_connection
from student_orm.infrastructure.schema import synchronize_schema
from student_orm.infrastructure.student_repository import StudentRepository
from student_orm.mapping.entity import IdStrategy
from student_orm.mapping.student import student_mapper
from student_orm.utils.logging import configure_logging

app = typer.Typer(help="Student ORM walkthrough CLI.")

# Students written by the `write` command.
SAMPLE_STUDENTS = (
    ("Lee", date(1999, 1, 1), StudentGroup.DAISY),
    ("Amal", date(1980, 1, 1), StudentGroup.LOTUS),
)

DsnOption = typer.Option(None, "--dsn", help="Optional DSN override for Postgres.")


def _bootstrap() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


def _repository(conn) -> StudentRepository:
    settings = get_settings()
    mapper = student_mapper(settings.id_strategy, table=settings.student_table)
    return StudentRepository(conn, mapper)


def _fail(message: str) -> NoReturn:
    typer.echo(message, err=True)
    raise typer.Exit(code=1)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"table={settings.student_table} schema_mode={settings.schema_mode.value} "
        f"id_strategy={settings.id_strategy.value}"
    )


@app.command("init-schema")
def init_schema(
    mode: Optional[SchemaMode] = typer.Option(
        None,
        "--mode",
        "-m",
        help="create, update or validate (default from settings).",
    ),
    dsn: Optional[str] = DsnOption,
) -> None:
    """
    Synchronize the student table with the entity mapping.
    """
    _bootstrap()
    settings = get_settings()
    effective = mode or settings.schema_mode
    mapping = student_mapper(settings.id_strategy, table=settings.student_table).mapping
    try:
        with sync_connection(dsn) as conn:
            changed = synchronize_schema(conn, mapping, effective)
    except SchemaValidationError as exc:
        _fail(str(exc))
    typer.echo(f"Schema {effective.value}: {', '.join(changed) if changed else 'no changes'}")


@app.command()
def write(
    first_id: int = typer.Option(
        1,
        "--first-id",
        help="First identifier used when ids are caller-assigned.",
    ),
    dsn: Optional[str] = DsnOption,
) -> None:
    """
    Persist the sample students in a single transaction.
    """
    _bootstrap()
    settings = get_settings()
    caller_assigned = settings.id_strategy is IdStrategy.CALLER_ASSIGNED
    records: List[StudentRecord] = [
        StudentRecord(
            id=first_id + offset if caller_assigned else None,
            name=name,
            date_of_birth=dob,
            group=group,
        )
        for offset, (name, dob, group) in enumerate(SAMPLE_STUDENTS)
    ]
    try:
        with sync_connection(dsn) as conn:
            repo = _repository(conn)
            with conn.transaction():
                stored = [repo.persist(record) for record in records]
    except MappingError as exc:
        _fail(f"Mapping failed: {exc}")
    except errors.UniqueViolation as exc:
        _fail(f"Store rejected duplicate identifier: {exc.diag.message_detail or exc}")
    for record in stored:
        typer.echo(str(record))


@app.command()
def add(
    name: str = typer.Option(..., "--name", "-n", help="Student name."),
    dob: datetime = typer.Option(
        ..., "--dob", formats=["%Y-%m-%d"], help="Date of birth (YYYY-MM-DD)."
    ),
    group: StudentGroup = typer.Option(
        ..., "--group", "-g", case_sensitive=False, help="Student group."
    ),
    student_id: Optional[int] = typer.Option(
        None,
        "--id",
        help="Identifier; required when ID_STRATEGY=caller_assigned, rejected otherwise.",
    ),
    dsn: Optional[str] = DsnOption,
) -> None:
    """
    Persist one student.
    """
    _bootstrap()
    configured = get_settings().id_strategy
    if configured is IdStrategy.CALLER_ASSIGNED and student_id is None:
        _fail("--id is required when ids are caller-assigned")
    if configured is IdStrategy.STORE_ASSIGNED and student_id is not None:
        _fail("--id is not accepted when ids are store-assigned")
    record = StudentRecord(id=student_id, name=name, date_of_birth=dob, group=group)
    try:
        with sync_connection(dsn) as conn:
            stored = _repository(conn).persist(record)
    except MappingError as exc:
        _fail(f"Mapping failed: {exc}")
    except errors.UniqueViolation as exc:
        _fail(f"Store rejected duplicate identifier: {exc.diag.message_detail or exc}")
    typer.echo(str(stored))


@app.command()
def read(
    student_id: int = typer.Argument(..., help="Primary key of the student to read."),
    dsn: Optional[str] = DsnOption,
) -> None:
    """
    Read a student by primary key.
    """
    _bootstrap()
    try:
        with sync_connection(dsn) as conn:
            student = _repository(conn).find(student_id)
    except MappingError as exc:
        _fail(f"Mapping failed: {exc}")
    if student is None:
        _fail(f"No student with id={student_id}")
    typer.echo(str(student))


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
