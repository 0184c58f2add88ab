"""Key-value storage media.

A medium maps string keys to raw string values, synchronously.  Stores never
talk to a medium directly: they go through :mod:`.validated`, which pairs
every read and write with schema validation.
"""

from __future__ import annotations

import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..errors import QuotaExceededError, StorageParseError, StorageUnavailableError
from ..log import logger


class KeyValueStorage(ABC):
    """Synchronous string-to-string medium.

    ``get_item`` returns ``None`` for a missing key; ``set_item`` raises
    :class:`QuotaExceededError` when the write does not fit.
    """

    @abstractmethod
    def get_item(self, key: str) -> str | None: ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None: ...

    @abstractmethod
    def remove_item(self, key: str) -> None: ...

    @abstractmethod
    def keys(self) -> list[str]: ...

    def clear(self) -> None:
        for key in self.keys():
            self.remove_item(key)


def _used_bytes(items: dict[str, str]) -> int:
    return sum(len(k.encode("utf-8")) + len(v.encode("utf-8")) for k, v in items.items())


class MemoryStorage(KeyValueStorage):
    """Process-local medium, used by tests and ephemeral sessions."""

    def __init__(self, quota_bytes: int | None = None) -> None:
        self.quota_bytes = quota_bytes
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            pending = {**self._items, key: value}
            if _used_bytes(pending) > self.quota_bytes:
                raise QuotaExceededError(
                    f"writing {key!r} exceeds the {self.quota_bytes} byte quota"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)


class FileStorage(KeyValueStorage):
    """All keys in one JSON document on disk, rewritten atomically.

    On-disk format: ``{key: raw_string, ...}``.  The document is read once
    and cached; :meth:`reload` drops the cache to pick up foreign writes.
    """

    def __init__(self, path: Path, quota_bytes: int | None = None) -> None:
        self.path = path
        self.quota_bytes = quota_bytes
        self._items: dict[str, str] | None = None

    # -- core I/O -------------------------------------------------------------

    def _load(self) -> dict[str, str]:
        if self._items is None:
            self._items = {}
            try:
                if self.path.exists():
                    raw = json.loads(self.path.read_text(encoding="utf-8"))
                    if isinstance(raw, dict):
                        self._items = {str(k): str(v) for k, v in raw.items()}
                    else:
                        logger.warning("ignoring non-object storage file %s", self.path)
            except (OSError, json.JSONDecodeError):
                logger.warning("failed to load storage from %s", self.path, exc_info=True)
        return self._items

    def _save(self, items: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".storage-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(items, fh, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise

    def reload(self) -> None:
        self._items = None

    # -- KeyValueStorage --------------------------------------------------------

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        pending = {**self._load(), key: value}
        if self.quota_bytes is not None and _used_bytes(pending) > self.quota_bytes:
            raise QuotaExceededError(
                f"writing {key!r} exceeds the {self.quota_bytes} byte quota"
            )
        self._save(pending)
        self._items = pending

    def remove_item(self, key: str) -> None:
        items = self._load()
        if key not in items:
            return
        pending = {k: v for k, v in items.items() if k != key}
        self._save(pending)
        self._items = pending

    def keys(self) -> list[str]:
        return list(self._load())


def load_json(storage: KeyValueStorage, key: str) -> Any:
    """Return the parsed value under *key*, or ``None`` when absent.

    The literal text ``undefined`` counts as absent.  Unparsable text raises
    :class:`StorageParseError`.
    """
    raw = storage.get_item(key)
    if raw is None or raw == "undefined":
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StorageParseError(f"invalid JSON stored under {key!r}: {exc}") from exc


# -- process-wide medium ------------------------------------------------------

_storage: KeyValueStorage | None = None


def configure_storage(storage: KeyValueStorage | None) -> None:
    """Install the medium every store reads and writes (``None`` detaches)."""
    global _storage
    _storage = storage


def get_storage() -> KeyValueStorage:
    if _storage is None:
        raise StorageUnavailableError("no storage medium configured")
    return _storage
