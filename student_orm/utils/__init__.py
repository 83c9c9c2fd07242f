"""
Utilities package for the student ORM walkthrough.

Exports shared logging helpers. Keep this package lightweight and free of
domain-specific logic.
"""

from student_orm.utils.logging import JsonFormatter, configure_logging, get_logger

__all__ = [
    "JsonFormatter",
    "configure_logging",
    "get_logger",
]
