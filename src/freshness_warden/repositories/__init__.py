from .check_repo import CheckRepository
from .source_repo import UNSET, SourceRepository

__all__ = ["CheckRepository", "SourceRepository", "UNSET"]
