"""
Column codecs: per-kind encode/decode rules between field values and stored scalars.

Each codec raises `EncodingError` on write and `DecodingError` on read and never
returns a partially converted value. Codecs also report the SQL type used when
the table is created from the entity mapping.
"""

from __future__ import annotations

import abc
import enum
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Dict, Generic, Mapping, Optional, Type, TypeVar

from student_orm.exceptions import DecodingError, EncodingError

if TYPE_CHECKING:  # pragma: no cover - typing only
    from student_orm.mapping.entity import ColumnMapping

E = TypeVar("E", bound=enum.Enum)


class ColumnCodec(abc.ABC):
    """Base codec; `None` passes through untouched in both directions."""

    def encode(self, value: Any, field: str) -> Any:
        if value is None:
            return None
        return self._encode(value, field)

    def decode(self, value: Any, field: str) -> Any:
        if value is None:
            return None
        return self._decode(value, field)

    @abc.abstractmethod
    def _encode(self, value: Any, field: str) -> Any:
        """Convert a non-null field value into its stored scalar."""

    @abc.abstractmethod
    def _decode(self, value: Any, field: str) -> Any:
        """Convert a non-null stored scalar back into a field value."""

    @abc.abstractmethod
    def sql_type(self, column: "ColumnMapping") -> str:
        """Column type used when the table is created from the mapping."""


class IntegerCodec(ColumnCodec):
    def _encode(self, value: Any, field: str) -> int:
        # bool is an int subclass but never a valid identifier
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodingError(f"Field '{field}' expects an integer, got {value!r}", field, value)
        return value

    def _decode(self, value: Any, field: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodingError(f"Column for '{field}' holds non-integer {value!r}", field, value)
        return value

    def sql_type(self, column: "ColumnMapping") -> str:
        return "INTEGER"


class TextCodec(ColumnCodec):
    def _encode(self, value: Any, field: str) -> str:
        if not isinstance(value, str):
            raise EncodingError(f"Field '{field}' expects text, got {value!r}", field, value)
        return value

    def _decode(self, value: Any, field: str) -> str:
        if not isinstance(value, str):
            raise DecodingError(f"Column for '{field}' holds non-text {value!r}", field, value)
        return value

    def sql_type(self, column: "ColumnMapping") -> str:
        if column.length is not None:
            return f"VARCHAR({column.length})"
        return "TEXT"


class DateCodec(ColumnCodec):
    """
    Date-only temporal encoding.

    A `datetime` held in memory is truncated to its calendar day on write. On read,
    `date` values, `datetime` values and ISO `YYYY-MM-DD` text are accepted.
    """

    def _encode(self, value: Any, field: str) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        raise EncodingError(f"Field '{field}' expects a date, got {value!r}", field, value)

    def _decode(self, value: Any, field: str) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return datetime.strptime(value, "%Y-%m-%d").date()
            except ValueError as exc:
                raise DecodingError(
                    f"Column for '{field}' holds malformed date {value!r}", field, value
                ) from exc
        raise DecodingError(f"Column for '{field}' holds non-date {value!r}", field, value)

    def sql_type(self, column: "ColumnMapping") -> str:
        return "DATE"


class EnumNameCodec(ColumnCodec, Generic[E]):
    """
    Stores enum members by canonical name, looked up in an explicit name table.

    Positional encoding is deliberately unsupported: an integer read from the
    store is rejected like any other unknown value.
    """

    def __init__(self, enum_type: Type[E], names: Mapping[E, str]) -> None:
        missing = [member for member in enum_type if member not in names]
        if missing:
            raise ValueError(f"Name table for {enum_type.__name__} lacks {missing}")
        self.enum_type = enum_type
        self._to_name: Dict[E, str] = dict(names)
        self._from_name: Dict[str, E] = {name: member for member, name in names.items()}
        if len(self._from_name) != len(self._to_name):
            raise ValueError(f"Name table for {enum_type.__name__} has duplicate names")

    @property
    def names(self) -> list[str]:
        return list(self._from_name)

    def _encode(self, value: Any, field: str) -> str:
        if not isinstance(value, self.enum_type) or value not in self._to_name:
            raise EncodingError(
                f"Field '{field}' holds {value!r}, not a member of {self.enum_type.__name__}",
                field,
                value,
            )
        return self._to_name[value]

    def _decode(self, value: Any, field: str) -> E:
        member: Optional[E] = self._from_name.get(value) if isinstance(value, str) else None
        if member is None:
            raise DecodingError(
                f"Column for '{field}' holds {value!r}; expected one of {self.names}",
                field,
                value,
            )
        return member

    def sql_type(self, column: "ColumnMapping") -> str:
        width = column.length or max(len(name) for name in self._from_name)
        return f"VARCHAR({width})"


__all__ = [
    "ColumnCodec",
    "IntegerCodec",
    "TextCodec",
    "DateCodec",
    "EnumNameCodec",
]
