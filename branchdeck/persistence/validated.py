"""Validated read/write boundary between stores and the storage medium.

Neither function raises.  Both return a :class:`StorageResult`; callers decide
whether a failure is worth logging.

Reads resolve through a fixed fallback chain:

1. the stored value, if present and valid;
2. the supplied default, if any;
3. ``None``, if the schema permits it.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..errors import NoDataError, StoreError
from ..log import logger
from ._base import get_storage, load_json
from .validation import to_jsonable, validate

T = TypeVar("T")


class _Missing:
    """Marks a read with no default; ``None`` is a real default."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


@dataclass(frozen=True)
class StorageResult(Generic[T]):
    success: bool
    data: T | None = None
    error: Exception | None = None


def _is_empty(value: Any) -> bool:
    """Values that are removed from storage rather than written."""
    if value is None or value is False or value == "":
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return isinstance(value, (list, tuple)) and not value


def _fallback_to_default(key: str, schema: Any, default: Any) -> StorageResult[Any]:
    checked = validate(default, schema)
    if checked.success:
        return StorageResult(True, data=checked.data)
    logger.warning("default for %r does not match its schema: %s", key, checked.error)
    return StorageResult(True, data=default)


def _resolve_absent(key: str, schema: Any, default: Any) -> StorageResult[Any]:
    if default is not MISSING:
        from_default = validate(default, schema)
        if from_default.success:
            return StorageResult(True, data=from_default.data)
        if validate(None, schema).success:
            logger.warning(
                "invalid default for %r, falling back to None: %s",
                key,
                from_default.error,
            )
            return StorageResult(True, data=None)
        logger.error("invalid default for %r: %s", key, from_default.error)
        return StorageResult(False, error=from_default.error)

    if validate(None, schema).success:
        return StorageResult(True, data=None)
    return StorageResult(
        False,
        error=NoDataError(f"no data found for key {key!r} and None is not permitted"),
    )


def read_validated(
    key: str, schema: Any, default: Any = MISSING
) -> StorageResult[Any]:
    """Read *key* and validate it against *schema*.

    Leave *default* out for "no default"; an explicit ``None`` is a default
    like any other value.
    """
    try:
        stored = load_json(get_storage(), key)
        if stored is None:
            return _resolve_absent(key, schema, default)

        result = validate(stored, schema)
        if result.success:
            return StorageResult(True, data=result.data)
        if default is not MISSING:
            logger.warning(
                "stored data for %r failed validation, using default: %s",
                key,
                result.error,
            )
            return _fallback_to_default(key, schema, default)
        return StorageResult(False, error=result.error)
    except Exception as exc:  # the adapter never raises
        if default is not MISSING:
            logger.warning("error reading %r, using default: %s", key, exc)
            return _fallback_to_default(key, schema, default)
        logger.debug("error reading %r", key, exc_info=True)
        return StorageResult(False, error=exc)


def write_validated(key: str, value: Any, schema: Any) -> StorageResult[Any]:
    """Validate *value* and write it under *key*.

    Falsy values and empty sequences remove the key instead.
    """
    result = validate(value, schema)
    if not result.success:
        return StorageResult(False, error=result.error)

    data = result.data
    try:
        storage = get_storage()
        if _is_empty(data):
            storage.remove_item(key)
        else:
            raw = json.dumps(to_jsonable(data, schema), ensure_ascii=False)
            storage.set_item(key, raw)
    except (StoreError, OSError, TypeError, ValueError) as exc:
        return StorageResult(False, data=data, error=exc)
    return StorageResult(True, data=data)
