"""
Domain models for the student walkthrough.

`StudentRecord` is the plain in-memory entity; how each of its fields reaches
the `student` table is declared separately in `student_orm.mapping.student`.
"""
from __future__ import annotations

import enum
from datetime import date, datetime
from types import MappingProxyType
from typing import Mapping, Optional, Union

from pydantic import BaseModel, Field


class StudentGroup(enum.Enum):
    """Closed set of student classifications."""

    LOTUS = "LOTUS"
    ROSE = "ROSE"
    DAISY = "DAISY"


# Canonical stored names. Declaration order of StudentGroup carries no meaning.
GROUP_NAMES: Mapping[StudentGroup, str] = MappingProxyType(
    {
        StudentGroup.LOTUS: "LOTUS",
        StudentGroup.ROSE: "ROSE",
        StudentGroup.DAISY: "DAISY",
    }
)


class StudentRecord(BaseModel):
    """
    Representation of a single student, in memory or read back from the store.
    """

    id: Optional[int] = Field(None, description="Primary key; caller- or store-assigned.")
    name: Optional[str] = Field(None, description="Display name.")
    date_of_birth: Optional[Union[datetime, date]] = Field(
        None, description="Calendar date of birth; any time-of-day is not persisted."
    )
    group: Optional[StudentGroup] = Field(None, description="Student classification.")
    transient_note: Optional[str] = Field(None, description="In-memory only, never stored.")

    model_config = {
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    def __str__(self) -> str:
        group = self.group.name if isinstance(self.group, StudentGroup) else self.group
        return f"Student(id={self.id}, name={self.name}, dob={self.date_of_birth}, group={group})"


__all__ = ["GROUP_NAMES", "StudentGroup", "StudentRecord"]
