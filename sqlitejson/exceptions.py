"""Custom exceptions for sqlitejson."""

from typing import Any


class SqliteJsonError(Exception):
    """Base exception for all sqlitejson errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ConfigurationError(SqliteJsonError):
    """Configuration-related errors."""

    pass


class InvalidRequestError(SqliteJsonError):
    """Export request is malformed or underspecified."""

    pass


class DatabaseError(SqliteJsonError):
    """Connection, SQL or catalog failure."""

    def __init__(self, message: str, statement: str | None = None) -> None:
        super().__init__(message, statement=statement)


class SerializationError(SqliteJsonError):
    """Row data cannot be represented as JSON."""

    def __init__(self, message: str, column: str | None = None) -> None:
        super().__init__(message, column=column)


class ExportIOError(SqliteJsonError):
    """Writing the export file failed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}", path=path, reason=reason)


def get_exit_code(error: Exception) -> int:
    """Map exception to CLI exit code."""
    code_map = {
        InvalidRequestError: 2,
        DatabaseError: 3,
        SerializationError: 4,
        ExportIOError: 5,
        ConfigurationError: 1,
    }

    for exc_type, code in code_map.items():
        if isinstance(error, exc_type):
            return code

    return 1
