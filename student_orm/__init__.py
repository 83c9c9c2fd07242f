"""
Student ORM walkthrough - object-relational mapping for a single entity.

This package maps a plain `StudentRecord` to and from relational rows and
demonstrates the usual mapping decisions:

- Caller-assigned vs. store-assigned primary keys
- Enum values stored by canonical name, never by position
- Date-only temporal encoding
- Transient fields that never reach the row

The relational store (PostgreSQL via psycopg) is an external collaborator;
the mapping layer itself performs no I/O.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from student_orm.config import SchemaMode, Settings, get_settings
from student_orm.domain.models import GROUP_NAMES, StudentGroup, StudentRecord
from student_orm.exceptions import (
    DecodingError,
    EncodingError,
    MappingError,
    SchemaValidationError,
    ValidationError,
)
from student_orm.infrastructure.student_repository import StudentRepository
from student_orm.mapping import IdStrategy, Mapper, Row, STUDENT_MAPPING, student_mapper
from student_orm.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "SchemaMode",
    "Settings",
    "get_settings",
    # Domain
    "GROUP_NAMES",
    "StudentGroup",
    "StudentRecord",
    # Mapping
    "IdStrategy",
    "Mapper",
    "Row",
    "STUDENT_MAPPING",
    "student_mapper",
    # Errors
    "MappingError",
    "ValidationError",
    "EncodingError",
    "DecodingError",
    "SchemaValidationError",
    # Persistence
    "StudentRepository",
    # Logging
    "configure_logging",
    "get_logger",
]
