"""Boundary errors. The analytics core never raises; these come from parsing, config and persistence lookups."""

from __future__ import annotations


class WardenError(Exception):
    """Base class for errors reported to the operator as `Error: <message>`."""


class InvalidStatusError(WardenError):
    pass


class ValidationError(WardenError):
    pass


class SourceNotFoundError(WardenError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Source '{name}' not found.")
        self.name = name


class ConfigurationError(WardenError):
    pass
