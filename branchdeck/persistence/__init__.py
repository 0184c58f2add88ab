"""Persistence layer: storage media and the validated read/write boundary."""

from ._base import (
    FileStorage,
    KeyValueStorage,
    MemoryStorage,
    configure_storage,
    get_storage,
    load_json,
)
from .validated import MISSING, StorageResult, read_validated, write_validated
from .validation import ValidationResult, get_adapter, validate

__all__ = [
    "MISSING",
    "FileStorage",
    "KeyValueStorage",
    "MemoryStorage",
    "StorageResult",
    "ValidationResult",
    "configure_storage",
    "get_adapter",
    "get_storage",
    "load_json",
    "read_validated",
    "validate",
    "write_validated",
]
