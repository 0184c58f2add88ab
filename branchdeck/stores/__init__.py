"""Generic persistent stores and the store registry."""

from ._base import AbstractStore, StoreRegistry, get_registry, key_parts_of
from .map_store import MapStore
from .merge import deep_merge
from .scalar import ScalarStore
from .set_store import SetStore

__all__ = [
    "AbstractStore",
    "MapStore",
    "ScalarStore",
    "SetStore",
    "StoreRegistry",
    "deep_merge",
    "get_registry",
    "key_parts_of",
]
