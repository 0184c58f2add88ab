"""Schema validation on top of pydantic ``TypeAdapter``.

A *schema* is anything pydantic can build an adapter for: a model class,
``list[str]``, ``tuple[str, int]``, ``Literal[...]`` and so on.  ``X | None``
is how a schema says that an absent value is acceptable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from ..errors import SchemaValidationError

T = TypeVar("T")

_adapters: dict[Any, TypeAdapter[Any]] = {}


def get_adapter(schema: Any) -> TypeAdapter[Any]:
    """Return a (cached) ``TypeAdapter`` for *schema*."""
    if isinstance(schema, TypeAdapter):
        return schema
    try:
        adapter = _adapters.get(schema)
    except TypeError:  # unhashable schema, e.g. Annotated with list metadata
        return TypeAdapter(schema)
    if adapter is None:
        adapter = _adapters[schema] = TypeAdapter(schema)
    return adapter


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    success: bool
    data: T | None = None
    error: SchemaValidationError | None = None


def validate(value: Any, schema: Any) -> ValidationResult[Any]:
    """Validate *value* against *schema* without raising."""
    try:
        data = get_adapter(schema).validate_python(value)
    except ValidationError as exc:
        return ValidationResult(False, error=SchemaValidationError.from_pydantic(exc))
    return ValidationResult(True, data=data)


def to_jsonable(value: Any, schema: Any) -> Any:
    """Dump already-validated *value* to plain JSON data (camelCase aliases)."""
    return get_adapter(schema).dump_python(value, mode="json", by_alias=True)
