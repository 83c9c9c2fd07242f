"""
Pytest configuration for the student ORM walkthrough.

Provides fixtures for:
- Settings override for integration tests
- Database connection management
- A freshly created student table per test
"""

from __future__ import annotations

import os
from typing import Generator

import psycopg
import pytest

from student_orm.config import SchemaMode, Settings
from student_orm.infrastructure.schema import synchronize_schema
from student_orm.mapping import STUDENT_MAPPING


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        _env_file=None,
        db_host=os.getenv("DB_HOST", "localhost"),
        db_port=int(os.getenv("DB_PORT", "5432")),
        db_user=os.getenv("DB_USER", "postgres"),
        db_password=os.getenv("DB_PASSWORD", "postgres"),
        db_name=os.getenv("DB_NAME", "students"),
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def test_dsn(test_settings: Settings) -> str:
    """
    Database connection string for tests.
    """
    return test_settings.dsn


@pytest.fixture(scope="session")
def db_connection_available(test_dsn: str) -> bool:
    """
    Check if database is reachable.

    Used to conditionally skip integration tests when DB is not available.
    """
    try:
        with psycopg.connect(test_dsn, connect_timeout=5) as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT 1;")
                cur.fetchone()
        return True
    except psycopg.Error:
        return False


@pytest.fixture(scope="function")
def db_connection(
    test_dsn: str, db_connection_available: bool
) -> Generator[psycopg.Connection, None, None]:
    """
    Provide an autocommit connection for integration tests.

    Skips tests if database is not available.
    """
    if not db_connection_available:
        pytest.skip("Database not available for integration tests")

    conn = psycopg.connect(test_dsn, autocommit=True)
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def fresh_student_table(db_connection: psycopg.Connection) -> psycopg.Connection:
    """
    Recreate the student table before each test function.

    This ensures test isolation, including identity sequence resets.
    """
    synchronize_schema(db_connection, STUDENT_MAPPING, SchemaMode.CREATE)
    return db_connection
