"""Store holding an insertion-ordered key/value map."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, TypeVar

from ._base import AbstractStore, KeyPart, key_parts_of

K = TypeVar("K")
V = TypeVar("V")


class MapStore(AbstractStore[V, dict[K, V]]):
    """Key to value mapping; ``list`` yields the values in insertion order.

    Persisted as a JSON array of ``[key, value]`` pairs so that non-string
    keys survive the round trip.
    """

    def __init__(
        self, key: str | None = None, key_schema: Any = str, value_schema: Any = Any
    ) -> None:
        self._key_schema = key_schema
        self._value_schema = value_schema
        entries = list[tuple[key_schema, value_schema]]  # type: ignore[valid-type]
        super().__init__(key, entries)

    def set(self, key: K, value: V) -> None:
        self._set_state({**self._state(), key: value})
        self.update_storage()

    def delete(self, keys: Iterable[K]) -> None:
        doomed = set(keys)
        self._set_state({k: v for k, v in self._state().items() if k not in doomed})
        self.update_storage()

    def has(self, key: K) -> bool:
        return key in self._state()

    def get(self, key: K) -> V | None:
        return self._state().get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._state()

    def __len__(self) -> int:
        return len(self._state())

    # -- hooks ------------------------------------------------------------------

    def get_as_list(self) -> list[V]:
        return list(self._state().values())

    def get_storable_data(self) -> list[tuple[K, V]]:
        return list(self._state().items())

    def get_data_schema(self) -> Any:
        return self.schema

    def create_collection(self, data: Any) -> dict[K, V]:
        return dict(data or ())

    def do_clear(self) -> None:
        self._set_state({})

    def get_default_value(self) -> Any:
        return []

    @classmethod
    def get_instance(
        cls,
        key: KeyPart | Sequence[KeyPart],
        key_schema: Any = str,
        value_schema: Any = Any,
    ) -> MapStore[Any, Any]:
        return cls.get_common_instance((key_schema, value_schema), key_parts_of(key))
