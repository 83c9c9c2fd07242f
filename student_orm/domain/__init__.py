"""
Domain package for the student walkthrough.

Exports the entity and its closed classification set. Keep this package
focused on data definitions; encoding rules live in `student_orm.mapping`.
"""

from student_orm.domain.models import GROUP_NAMES, StudentGroup, StudentRecord

__all__ = [
    "GROUP_NAMES",
    "StudentGroup",
    "StudentRecord",
]
