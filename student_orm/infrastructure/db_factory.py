"""
Database connection factory for the student ORM walkthrough.

Hands out plain psycopg connections to the external relational store. Each
caller owns the connection it receives, including its transaction boundaries;
there is deliberately no pool.

Includes retry logic for transient connection failures using tenacity.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator, Optional

import psycopg
from psycopg import Connection, sql
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from student_orm.config import Settings, get_settings
from student_orm.utils.logging import get_logger

log = get_logger(__name__)


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings."""
    return (settings or get_settings()).dsn


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type((psycopg.OperationalError, psycopg.InterfaceError)),
    reraise=True,
)
def get_sync_connection(dsn_override: Optional[str] = None) -> Connection:
    """
    Acquire a dedicated synchronous connection with automatic retry.

    Retries up to 3 times with exponential backoff for transient connection errors.

    Parameters
    ----------
    dsn_override : str | None
        Connect here instead of the configured database (tests, CLI flags).

    Returns
    -------
    Connection
        A new psycopg connection instance.

    Raises
    ------
    psycopg.OperationalError
        If connection fails after all retry attempts.
    """
    return psycopg.connect(dsn_override or build_dsn())


def apply_statement_timeout(cur: psycopg.Cursor, timeout_ms: int) -> None:
    """Bound every statement on the cursor's session; non-positive disables it."""
    if timeout_ms <= 0:
        return
    cur.execute(sql.SQL("SET statement_timeout = {}").format(sql.Literal(int(timeout_ms))))


@contextmanager
def sync_connection(dsn_override: Optional[str] = None) -> Generator[Connection, None, None]:
    """
    Context manager yielding a connection that commits on success.

    Example
    -------
        with sync_connection() as conn:
            StudentRepository(conn).persist(record)
    """
    conn = get_sync_connection(dsn_override)
    try:
        with conn.cursor() as cur:
            apply_statement_timeout(cur, get_settings().db_statement_timeout_ms)
        with conn:
            yield conn
    finally:
        if not conn.closed:
            conn.close()
        log.debug("Connection closed")


__all__ = [
    "apply_statement_timeout",
    "build_dsn",
    "get_sync_connection",
    "sync_connection",
]
