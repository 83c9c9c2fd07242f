"""
Error taxonomy for the student mapping layer.

Mapping errors are deterministic and never retried: they point at a programming
or data-integrity defect. Errors raised by the relational store itself (for
example a unique violation) are psycopg exceptions and are not wrapped here.
"""

from __future__ import annotations

from typing import Any, Optional


class MappingError(Exception):
    """Base class for failures while translating between records and rows."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value


class ValidationError(MappingError):
    """A record violates a column constraint (missing id, null, length)."""


class EncodingError(MappingError):
    """An in-memory value cannot be encoded into its column."""


class DecodingError(MappingError):
    """A stored column value cannot be decoded into its field type."""


class SchemaValidationError(Exception):
    """The existing table does not match the entity mapping."""

    def __init__(self, table: str, missing_columns: list[str]) -> None:
        if missing_columns:
            detail = f"missing columns: {', '.join(missing_columns)}"
        else:
            detail = "table does not exist"
        super().__init__(f"Schema validation failed for '{table}': {detail}")
        self.table = table
        self.missing_columns = missing_columns


__all__ = [
    "MappingError",
    "ValidationError",
    "EncodingError",
    "DecodingError",
    "SchemaValidationError",
]
