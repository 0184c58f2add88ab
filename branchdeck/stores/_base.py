"""Abstract persistent store and the process-wide store registry.

A store owns one reactive collection (a ``reaktiv`` signal) plus a storage
key and the schema of its persisted form.  Every mutation updates the signal
first and then writes through the validated adapter; a failed write is
logged and the in-memory state is kept.  For the rest of the session memory
and storage may therefore disagree until the next successful write.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from reaktiv import Computed, Signal, untracked

from ..log import logger
from ..persistence.validated import (
    MISSING,
    StorageResult,
    read_validated,
    write_validated,
)
from ..persistence.validation import validate

T = TypeVar("T")
C = TypeVar("C")
S = TypeVar("S", bound="AbstractStore[Any, Any]")

KeyPart = str | int


class StoreRegistry:
    """Single instance per ``(store class, key)`` for the life of the process."""

    def __init__(self) -> None:
        self._instances: dict[tuple[type, str], AbstractStore[Any, Any]] = {}

    def get(self, cls: type, key: str) -> AbstractStore[Any, Any] | None:
        return self._instances.get((cls, key))

    def register(self, cls: type, key: str, store: AbstractStore[Any, Any]) -> None:
        self._instances[(cls, key)] = store

    def keys(self) -> list[tuple[type, str]]:
        return list(self._instances)

    def reset(self) -> None:
        """Forget every instance.  Tests only."""
        self._instances.clear()

    def __contains__(self, item: tuple[type, str]) -> bool:
        return item in self._instances

    def __len__(self) -> int:
        return len(self._instances)


_registry = StoreRegistry()


def get_registry() -> StoreRegistry:
    return _registry


def key_parts_of(key: KeyPart | Sequence[KeyPart]) -> list[KeyPart]:
    """Accept a single key part or a sequence of them."""
    if isinstance(key, (str, int)):
        return [key]
    return list(key)


class AbstractStore(ABC, Generic[T, C]):
    """Reactive collection ``C`` of items ``T`` mirrored to storage.

    Subclasses provide the collection shape through the ``get_*``,
    ``create_collection`` and ``do_clear`` hooks and their own mutation
    methods, which must end with :meth:`update_storage`.
    """

    def __init__(self, key: str | None = None, schema: Any = None) -> None:
        self._key = key
        self.schema = schema
        self._state: Signal[C] = Signal(self._initial_collection())
        self._list: Computed[list[T]] = Computed(self.get_as_list)
        self.update_from_storage()

    @property
    def key(self) -> str | None:
        return self._key

    @property
    def storage_key(self) -> str:
        return f"store_{self._key}"

    @property
    def state(self) -> C:
        return self._state()

    def _set_state(self, collection: C) -> None:
        self._state.set(collection)

    def _initial_collection(self) -> C:
        default = self.get_default_value()
        if default is MISSING:
            return self.create_collection(None)
        checked = validate(default, self.get_data_schema())
        return self.create_collection(checked.data if checked.success else default)

    # -- storage ----------------------------------------------------------------

    def update_from_storage(self) -> StorageResult[Any]:
        """Replace the in-memory state with what storage holds.

        Safe to call at any time; stores without a key stay untouched.
        """
        if not self._key:
            return StorageResult(True, data=self.get_storable_data())
        result = read_validated(
            self.storage_key, self.get_data_schema(), self.get_default_value()
        )
        if result.success:
            self._set_state(self.create_collection(result.data))
        else:
            logger.error(
                "Error loading %s data from %s: %s",
                type(self).__name__,
                self.storage_key,
                result.error,
            )
            self._set_state(self._initial_collection())
        return result

    def update_storage(self) -> StorageResult[Any] | None:
        """Persist the current state; failures are logged, never raised."""
        if not self._key:
            return None
        result = write_validated(
            self.storage_key, self.get_storable_data(), self.get_data_schema()
        )
        if not result.success:
            logger.error(
                "Error validating or storing %s data: %s",
                type(self).__name__,
                result.error,
            )
        return result

    def clear(self) -> None:
        self.do_clear()
        self.update_storage()

    # -- hooks ------------------------------------------------------------------

    @abstractmethod
    def get_as_list(self) -> list[T]: ...

    @abstractmethod
    def get_storable_data(self) -> Any: ...

    @abstractmethod
    def get_data_schema(self) -> Any: ...

    @abstractmethod
    def create_collection(self, data: Any) -> C: ...

    @abstractmethod
    def do_clear(self) -> None: ...

    def get_default_value(self) -> Any:
        """Default for an empty key; :data:`MISSING` when there is none."""
        return MISSING

    # -- registry ---------------------------------------------------------------

    @classmethod
    def get_common_instance(
        cls: type[S],
        args: Sequence[Any] = (),
        key_parts: Sequence[KeyPart] = (),
    ) -> S:
        """Return the one instance of *cls* for the joined *key_parts*.

        The first call constructs and hydrates it; later calls return the
        same object and touch nothing.
        """
        storage_key = (
            "_".join(str(part) for part in key_parts)
            if key_parts
            else cls.__name__.lower()
        )
        if not storage_key:
            raise ValueError("a storage key name must be provided")

        registry = get_registry()
        instance = registry.get(cls, storage_key)
        if instance is None:
            instance = cls(storage_key, *args)
            registry.register(cls, storage_key, instance)
            untracked(instance.update_from_storage)
        return instance  # type: ignore[return-value]

    # Declared last: inside the class body ``list`` names the property below.
    @property
    def list(self) -> list[T]:
        """Ordered projection of ``state``, recomputed only after a change.

        Each read returns a fresh list; the cached projection is shared.
        """
        return list(self._list())
