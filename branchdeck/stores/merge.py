"""Recursive merge for nested mappings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def deep_merge(base: Mapping[str, Any], partial: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new dict with *partial* merged into *base*.

    Nested mappings merge key by key; anything else in *partial* (lists
    included) replaces the value in *base*.  Neither argument is mutated.
    """
    merged = dict(base)
    for key, value in partial.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged
