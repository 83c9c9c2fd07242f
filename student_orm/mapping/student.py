"""
Column mapping for `StudentRecord` and a convenience mapper factory.
"""

from __future__ import annotations

from typing import Optional

from student_orm.domain.models import GROUP_NAMES, StudentGroup, StudentRecord
from student_orm.mapping.codecs import DateCodec, EnumNameCodec, IntegerCodec, TextCodec
from student_orm.mapping.entity import ColumnMapping, EntityMapping, IdStrategy
from student_orm.mapping.mapper import Mapper

STUDENT_TABLE = "student"

STUDENT_MAPPING = EntityMapping(
    model=StudentRecord,
    table=STUDENT_TABLE,
    columns=(
        ColumnMapping("id", "id", IntegerCodec(), primary_key=True, nullable=False),
        ColumnMapping("name", "name", TextCodec()),
        ColumnMapping("date_of_birth", "dob", DateCodec()),
        ColumnMapping("group", "student_group", EnumNameCodec(StudentGroup, GROUP_NAMES)),
        ColumnMapping("transient_note", persisted=False),
    ),
)


def student_mapper(
    id_strategy: IdStrategy = IdStrategy.STORE_ASSIGNED, table: Optional[str] = None
) -> Mapper:
    mapping = STUDENT_MAPPING if table in (None, STUDENT_TABLE) else STUDENT_MAPPING.with_table(table)
    return Mapper(mapping, id_strategy)


__all__ = ["STUDENT_MAPPING", "STUDENT_TABLE", "student_mapper"]
