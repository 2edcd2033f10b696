"""SQLAlchemy models for sources and their checks."""

from .base import Base
from .check import Check
from .source import Source

__all__ = [
    "Base",
    "Check",
    "Source",
]
