"""
Declarative entity mapping: which field goes to which column, and how.

An `EntityMapping` is an ordered tuple of `ColumnMapping` entries plus the model
class to rebuild on read. Excluded (transient) fields are declared with
`persisted=False` and are skipped uniformly by the mapper and the schema builder.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple, Type

from pydantic import BaseModel

from student_orm.mapping.codecs import ColumnCodec


class IdStrategy(str, enum.Enum):
    """Primary-key assignment strategy."""

    CALLER_ASSIGNED = "caller_assigned"
    STORE_ASSIGNED = "store_assigned"


@dataclass(frozen=True)
class ColumnMapping:
    attribute: str
    column: Optional[str] = None
    codec: Optional[ColumnCodec] = None
    persisted: bool = True
    primary_key: bool = False
    nullable: bool = True
    length: Optional[int] = None

    def __post_init__(self) -> None:
        if self.persisted and (self.column is None or self.codec is None):
            raise ValueError(f"Persisted field '{self.attribute}' needs a column and a codec")
        if self.primary_key and not self.persisted:
            raise ValueError(f"Primary key '{self.attribute}' cannot be transient")
        if self.length is not None and self.length <= 0:
            raise ValueError(f"Length for '{self.attribute}' must be positive")


@dataclass(frozen=True)
class EntityMapping:
    model: Type[BaseModel]
    table: str
    columns: Tuple[ColumnMapping, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        keys = [c for c in self.columns if c.primary_key]
        if len(keys) != 1:
            raise ValueError(f"Mapping for '{self.table}' needs exactly one primary key")
        names = [c.column for c in self.persisted_columns]
        if len(set(names)) != len(names):
            raise ValueError(f"Mapping for '{self.table}' repeats a column name")
        unknown = [c.attribute for c in self.columns if c.attribute not in self.model.model_fields]
        if unknown:
            raise ValueError(f"{self.model.__name__} has no field(s) {unknown}")

    @property
    def persisted_columns(self) -> Tuple[ColumnMapping, ...]:
        return tuple(c for c in self.columns if c.persisted)

    @property
    def primary_key(self) -> ColumnMapping:
        return next(c for c in self.columns if c.primary_key)

    def with_table(self, table: str) -> "EntityMapping":
        """Return the same mapping bound to another table name."""
        return EntityMapping(model=self.model, table=table, columns=self.columns)


__all__ = ["IdStrategy", "ColumnMapping", "EntityMapping"]
