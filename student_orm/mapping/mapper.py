"""
Record <-> row mapper.

The mapper is stateless after construction: `to_row` and `from_row` are pure
transformations driven by an `EntityMapping` and an explicit `IdStrategy`, so a
single instance may be shared freely between callers and threads.

Usage:
    from student_orm.mapping import IdStrategy, Mapper, STUDENT_MAPPING

    mapper = Mapper(STUDENT_MAPPING, IdStrategy.STORE_ASSIGNED)
    row = mapper.to_row(record)
    again = mapper.from_row({"id": 7, **row})
"""

from __future__ import annotations

from typing import Any, Dict, Mapping

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from student_orm.exceptions import DecodingError, ValidationError
from student_orm.mapping.entity import ColumnMapping, EntityMapping, IdStrategy
from student_orm.utils.logging import get_logger

log = get_logger(__name__)

Row = Dict[str, Any]


class Mapper:
    """
    Applies each column's encoding rule symmetrically on write and read.
    """

    def __init__(self, mapping: EntityMapping, id_strategy: IdStrategy) -> None:
        self.mapping = mapping
        self.id_strategy = IdStrategy(id_strategy)

    def to_row(self, record: BaseModel) -> Row:
        """
        Encode a record into a row of persisted columns, in declaration order.

        Raises
        ------
        ValidationError
            Caller-assigned id is missing, a non-nullable column is null, or a
            length constraint is exceeded.
        EncodingError
            A value cannot be encoded (e.g. unknown classification member).
        """
        row: Row = {}
        for column in self.mapping.persisted_columns:
            value = getattr(record, column.attribute)
            if column.primary_key:
                if self.id_strategy is IdStrategy.STORE_ASSIGNED:
                    if value is not None:
                        log.debug(
                            "Ignoring in-memory id for store-assigned key",
                            extra={"table": self.mapping.table, "id": value},
                        )
                    continue
                if value is None:
                    raise ValidationError(
                        f"Caller-assigned identifier '{column.attribute}' is required",
                        column.attribute,
                    )
            self._check_constraints(column, value)
            row[column.column] = column.codec.encode(value, column.attribute)
        return row

    def from_row(self, row: Mapping[str, Any]) -> BaseModel:
        """
        Decode a row into a new record; excluded fields keep their defaults.

        Raises
        ------
        DecodingError
            A column is missing or holds a value that does not decode.
        """
        values: Dict[str, Any] = {}
        for column in self.mapping.persisted_columns:
            if column.column not in row:
                raise DecodingError(
                    f"Row lacks column '{column.column}' for '{column.attribute}'",
                    column.attribute,
                )
            raw = row[column.column]
            if raw is None and (column.primary_key or not column.nullable):
                raise DecodingError(
                    f"Column '{column.column}' is null but '{column.attribute}' is required",
                    column.attribute,
                )
            values[column.attribute] = column.codec.decode(raw, column.attribute)
        try:
            return self.mapping.model(**values)
        except PydanticValidationError as exc:
            raise DecodingError(
                f"Row does not form a valid {self.mapping.model.__name__}: {exc}"
            ) from exc

    @staticmethod
    def _check_constraints(column: ColumnMapping, value: Any) -> None:
        if value is None:
            if not column.nullable:
                raise ValidationError(f"Field '{column.attribute}' must not be null", column.attribute)
            return
        if column.length is not None and isinstance(value, str) and len(value) > column.length:
            raise ValidationError(
                f"Field '{column.attribute}' exceeds {column.length} characters",
                column.attribute,
                value,
            )


__all__ = ["Mapper", "Row"]
