"""Error taxonomy for the game catalog.

Every failure that leaves the data-access layer is one of these types.
"Not found" is never an exception: lookups return None and deletes
return False.
"""

from __future__ import annotations

import enum

__all__ = [
    "CatalogError",
    "ConstraintKind",
    "ConstraintViolationError",
    "DatabaseConnectionError",
    "SchemaError",
    "ValidationError",
]


class CatalogError(Exception):
    """Base class for all catalog errors.

    Attributes:
        message: Human-readable description, usually the driver message.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    """Raised when input fails boundary validation before any write."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ConstraintKind(str, enum.Enum):
    UNIQUE = "unique"
    FOREIGN_KEY = "foreign_key"
    NOT_NULL = "not_null"
    CHECK = "check"
    UNKNOWN = "unknown"


class ConstraintViolationError(CatalogError):
    """Raised when the storage engine rejects a write on integrity grounds."""

    def __init__(self, message: str, kind: ConstraintKind = ConstraintKind.UNKNOWN) -> None:
        super().__init__(message)
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class DatabaseConnectionError(CatalogError):
    """Raised when the database cannot be opened, is closed, or is locked."""


class SchemaError(CatalogError):
    """Raised when the schema cannot be created or is newer than supported."""
