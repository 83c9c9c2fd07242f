"""
Schema synchronization for mapped entities.

Derives DDL from an `EntityMapping` and applies one of three modes, mirroring the
schema-generation setting of a persistence provider:

- CREATE   drop the table and create it fresh
- UPDATE   create the table if missing, add any missing columns
- VALIDATE only check that the table and every mapped column exist

This is not a migration engine: columns are never altered, renamed or dropped
outside CREATE mode.
"""

from __future__ import annotations

from typing import List

from psycopg import Connection, sql

from student_orm.config import SchemaMode
from student_orm.exceptions import SchemaValidationError
from student_orm.mapping.codecs import EnumNameCodec
from student_orm.mapping.entity import ColumnMapping, EntityMapping
from student_orm.utils.logging import get_logger

log = get_logger(__name__)


def column_type(column: ColumnMapping) -> str:
    """SQL type plus key/nullability clauses for a persisted column."""
    if column.primary_key:
        return f"{column.codec.sql_type(column)} GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY"
    ddl = column.codec.sql_type(column)
    if not column.nullable:
        ddl += " NOT NULL"
    return ddl


def column_definition(column: ColumnMapping) -> sql.Composed:
    parts = [sql.Identifier(column.column), sql.SQL(column_type(column))]
    if isinstance(column.codec, EnumNameCodec):
        parts.append(
            sql.SQL("CHECK ({} IN ({}))").format(
                sql.Identifier(column.column),
                sql.SQL(", ").join(sql.Literal(name) for name in column.codec.names),
            )
        )
    return sql.SQL(" ").join(parts)


def create_table_statement(mapping: EntityMapping) -> sql.Composed:
    return sql.SQL("CREATE TABLE IF NOT EXISTS {} ({})").format(
        sql.Identifier(mapping.table),
        sql.SQL(", ").join(column_definition(c) for c in mapping.persisted_columns),
    )


def existing_columns(conn: Connection, table: str) -> List[str]:
    """Column names of `table` in the current schema; empty if the table is absent."""
    with conn.cursor() as cur:
        cur.execute(
            """
            SELECT column_name
            FROM information_schema.columns
            WHERE table_schema = current_schema() AND table_name = %s
            ORDER BY ordinal_position;
            """,
            (table,),
        )
        return [row[0] for row in cur.fetchall()]


def synchronize_schema(conn: Connection, mapping: EntityMapping, mode: SchemaMode) -> List[str]:
    """
    Bring the mapped table in line with `mapping` according to `mode`.

    Returns
    -------
    List[str]
        Column names created or added (empty for VALIDATE or when nothing changed).

    Raises
    ------
    SchemaValidationError
        VALIDATE found the table or a column missing, or UPDATE found a table
        without its primary-key column.
    """
    mode = SchemaMode(mode)
    expected = [c.column for c in mapping.persisted_columns]

    if mode is SchemaMode.CREATE:
        with conn.cursor() as cur:
            cur.execute(sql.SQL("DROP TABLE IF EXISTS {}").format(sql.Identifier(mapping.table)))
            cur.execute(create_table_statement(mapping))
        log.info("Table created", extra={"table": mapping.table, "mode": mode.value})
        return expected

    present = existing_columns(conn, mapping.table)
    missing = [c for c in mapping.persisted_columns if c.column not in present]

    if mode is SchemaMode.VALIDATE:
        if not present or missing:
            raise SchemaValidationError(mapping.table, [c.column for c in missing] if present else [])
        log.info("Table validated", extra={"table": mapping.table})
        return []

    if not present:
        with conn.cursor() as cur:
            cur.execute(create_table_statement(mapping))
        log.info("Table created", extra={"table": mapping.table, "mode": mode.value})
        return expected

    if any(c.primary_key for c in missing):
        raise SchemaValidationError(mapping.table, [mapping.primary_key.column])

    with conn.cursor() as cur:
        for column in missing:
            cur.execute(
                sql.SQL("ALTER TABLE {} ADD COLUMN {}").format(
                    sql.Identifier(mapping.table), column_definition(column)
                )
            )
    added = [c.column for c in missing]
    if added:
        log.info("Columns added", extra={"table": mapping.table, "columns": added})
    return added


__all__ = [
    "column_definition",
    "column_type",
    "create_table_statement",
    "existing_columns",
    "synchronize_schema",
]
