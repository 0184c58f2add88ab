"""Store holding a set of unique items."""

from __future__ import annotations

from collections.abc import Iterable, KeysView, Sequence
from typing import Any, TypeVar

from ._base import AbstractStore, KeyPart, key_parts_of

T = TypeVar("T")


class SetStore(AbstractStore[T, dict[T, None]]):
    """Unique, hashable items; iteration follows insertion order.

    Items live as keys of a dict so the order survives a reload.  On disk
    the set is a JSON array.
    """

    def __init__(self, key: str | None = None, item_schema: Any = str) -> None:
        self._item_schema = item_schema
        super().__init__(key, list[item_schema])

    @property
    def state(self) -> KeysView[T]:  # type: ignore[override]
        return self._state().keys()

    def add(self, items: Iterable[T]) -> None:
        updated = dict(self._state())
        for item in items:
            updated.setdefault(item, None)
        self._set_state(updated)
        self.update_storage()

    def delete(self, items: Iterable[T]) -> None:
        updated = dict(self._state())
        for item in items:
            updated.pop(item, None)
        self._set_state(updated)
        self.update_storage()

    def has(self, item: T) -> bool:
        return item in self._state()

    def __contains__(self, item: object) -> bool:
        return item in self._state()

    def __len__(self) -> int:
        return len(self._state())

    # -- hooks ------------------------------------------------------------------

    def get_as_list(self) -> list[T]:
        return list(self._state())

    def get_storable_data(self) -> list[T]:
        return list(self._state())

    def get_data_schema(self) -> Any:
        return self.schema

    def create_collection(self, data: Any) -> dict[T, None]:
        return dict.fromkeys(data or ())

    def do_clear(self) -> None:
        self._set_state({})

    def get_default_value(self) -> Any:
        return []

    @classmethod
    def get_instance(
        cls, key: KeyPart | Sequence[KeyPart], item_schema: Any = str
    ) -> SetStore[Any]:
        return cls.get_common_instance((item_schema,), key_parts_of(key))
