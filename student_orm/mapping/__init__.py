"""
Mapping package: codecs, entity declarations and the record/row mapper.

Nothing in this package performs I/O.
"""

from student_orm.mapping.codecs import (
    ColumnCodec,
    DateCodec,
    EnumNameCodec,
    IntegerCodec,
    TextCodec,
)
from student_orm.mapping.entity import ColumnMapping, EntityMapping, IdStrategy
from student_orm.mapping.mapper import Mapper, Row
from student_orm.mapping.student import STUDENT_MAPPING, STUDENT_TABLE, student_mapper

__all__ = [
    # Codecs
    "ColumnCodec",
    "DateCodec",
    "EnumNameCodec",
    "IntegerCodec",
    "TextCodec",
    # Declarations
    "ColumnMapping",
    "EntityMapping",
    "IdStrategy",
    # Mapper
    "Mapper",
    "Row",
    "STUDENT_MAPPING",
    "STUDENT_TABLE",
    "student_mapper",
]
