"""Error taxonomy for the store layer and the service layer."""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError


class StoreError(Exception):
    """Base class for every failure the store layer reports."""


class SchemaValidationError(StoreError):
    """A value did not match its schema.

    ``description`` is a human-readable ``path: message; ...`` summary and
    ``issues`` the raw pydantic error list.
    """

    def __init__(
        self, description: str, issues: list[dict[str, Any]] | None = None
    ) -> None:
        super().__init__(description)
        self.description = description
        self.issues = issues or []

    @classmethod
    def from_pydantic(cls, exc: ValidationError) -> SchemaValidationError:
        return cls(format_validation_error(exc), exc.errors(include_url=False))


class PersistenceError(StoreError):
    """The key-value medium failed."""


class QuotaExceededError(PersistenceError):
    """A write would take the medium past its byte quota."""


class StorageParseError(PersistenceError):
    """A key holds text that is not valid JSON."""


class StorageUnavailableError(PersistenceError):
    """No storage medium has been configured for this process."""


class NoDataError(StoreError):
    """The key is absent and the schema does not permit ``None``."""


def format_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into ``loc: msg; loc: msg``."""
    parts = []
    for issue in exc.errors(include_url=False):
        loc = ".".join(str(p) for p in issue.get("loc", ()))
        msg = issue.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or str(exc)


class AppError(Exception):
    """Error raised by the service layer (backend commands and their glue)."""

    def __init__(
        self, message: str, kind: str = "unknown", description: str = ""
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.description = description

    def __repr__(self) -> str:
        return f"AppError(kind={self.kind!r}, message={self.message!r})"


def create_error(
    error: object,
    *,
    kind: str = "unknown",
    default_message: str = "Unknown error",
) -> AppError:
    """Normalize anything raised or returned by a backend call into an AppError."""
    if isinstance(error, AppError):
        return error
    if isinstance(error, ValidationError):
        return AppError(
            "Invalid data received",
            kind="validation_error",
            description=format_validation_error(error),
        )
    if isinstance(error, SchemaValidationError):
        return AppError(
            "Invalid data received",
            kind="validation_error",
            description=error.description,
        )
    if isinstance(error, Exception):
        return AppError(
            str(error) or default_message,
            kind="runtime" if kind == "unknown" else kind,
            description=type(error).__name__,
        )
    if isinstance(error, str):
        return AppError(error or default_message, kind=kind)
    if isinstance(error, dict):
        message = error.get("message")
        return AppError(
            message if isinstance(message, str) and message else default_message,
            kind=str(error.get("kind") or kind),
            description=str(error.get("description") or ""),
        )
    return AppError(default_message, kind=kind, description=repr(error))
