"""
Configuration settings for the student ORM walkthrough.

Uses Pydantic Settings to load environment variables for the database
connection, logging, and the persistence choices handed to the mapper and the
schema synchronizer.
"""
from __future__ import annotations

import enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from student_orm.mapping.entity import IdStrategy


class SchemaMode(str, enum.Enum):
    """How the student table is synchronized with the entity mapping."""

    CREATE = "create"
    UPDATE = "update"
    VALIDATE = "validate"


class Settings(BaseSettings):
    # Database
    db_host: str = Field("localhost", alias="DB_HOST")
    db_port: int = Field(5432, alias="DB_PORT")
    db_user: str = Field("postgres", alias="DB_USER")
    db_password: str = Field("postgres", alias="DB_PASSWORD")
    db_name: str = Field("students", alias="DB_NAME")
    db_statement_timeout_ms: int = Field(30_000, alias="DB_STATEMENT_TIMEOUT_MS")

    # Application
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    # Persistence
    schema_mode: SchemaMode = Field(SchemaMode.UPDATE, alias="SCHEMA_MODE")
    id_strategy: IdStrategy = Field(IdStrategy.STORE_ASSIGNED, alias="ID_STRATEGY")
    student_table: str = Field("student", alias="STUDENT_TABLE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def dsn(self) -> str:
        return (
            f"postgresql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["SchemaMode", "Settings", "get_settings"]
