"""Store holding a single optional value."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from ..log import logger
from ..persistence.validated import MISSING
from ..persistence.validation import validate
from ._base import AbstractStore, KeyPart, key_parts_of
from .merge import deep_merge

T = TypeVar("T")


class ScalarStore(AbstractStore[T, T | None]):
    """One value of type ``T`` (or ``None``).

    The schema describes ``T`` itself; pass ``X | None`` when an empty store
    is a valid state.
    """

    def __init__(
        self, key: str | None = None, schema: Any = Any, default: Any = MISSING
    ) -> None:
        self._value_schema = schema
        self._default = default
        super().__init__(key, schema)

    def get(self) -> T | None:
        return self.state

    def set(self, value: T | None) -> None:
        self._set_state(value)
        self.update_storage()

    def update(self, partial: Mapping[str, Any]) -> None:
        """Deep-merge *partial* into an object-valued state.

        Model state is re-validated after the merge and the merge is dropped
        if it no longer fits the schema.
        """
        current = self.state
        if isinstance(current, BaseModel):
            merged = deep_merge(current.model_dump(), partial)
            checked = validate(merged, self._value_schema)
            if not checked.success:
                logger.warning(
                    "Ignoring update to %s: %s", self.storage_key, checked.error
                )
                return
            self.set(checked.data)
        elif isinstance(current, Mapping):
            self.set(deep_merge(current, partial))  # type: ignore[arg-type]
        else:
            logger.warning(
                "Cannot update %s: state is %s, not an object",
                self.storage_key,
                type(current).__name__,
            )

    # -- hooks ------------------------------------------------------------------

    def get_as_list(self) -> list[T]:
        value = self.state
        return [] if value is None else [value]

    def get_storable_data(self) -> Any:
        return self.state

    def get_data_schema(self) -> Any:
        return self._value_schema

    def create_collection(self, data: Any) -> T | None:
        return data

    def do_clear(self) -> None:
        self._set_state(None)

    def get_default_value(self) -> Any:
        return self._default

    @classmethod
    def get_instance(
        cls,
        key: KeyPart | Sequence[KeyPart],
        schema: Any = Any,
        default: Any = MISSING,
    ) -> ScalarStore[Any]:
        return cls.get_common_instance((schema, default), key_parts_of(key))
