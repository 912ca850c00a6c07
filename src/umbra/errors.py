"""Error hierarchy for umbra."""
from __future__ import annotations


class UmbraError(Exception):
    """Base error for all umbra errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ParseError(UmbraError):
    """Raised when stylesheet source cannot be parsed."""

    def __init__(
        self,
        message: str,
        line: int | None = None,
        column: int | None = None,
        *,
        cause: Exception | None = None,
    ) -> None:
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message, cause=cause)


class NotFoundError(UmbraError):
    """A stylesheet, color map or catalog file does not exist."""

    def __init__(self, path: str, message: str | None = None) -> None:
        super().__init__(message or f"File not found: {path}")
        self.path = path


class ValidationError(UmbraError):
    """A payload is not a well-formed color map or attribute."""


class PersistenceError(UmbraError):
    """Writing the color map or a stylesheet failed."""

    def __init__(self, path: str, *, cause: Exception | None = None) -> None:
        super().__init__(f"Failed to write {path}: {cause}", cause=cause)
        self.path = path
