"""Selection rules owned by the UI, not by the stores."""

from __future__ import annotations

from collections.abc import Iterable

from .models import Branch
from .stores import SetStore


def selectable_names(
    branches: Iterable[Branch], current: str | None, locked: Iterable[str]
) -> list[str]:
    """Branch names that may be selected: not checked out, not locked."""
    locked_names = set(locked)
    return [
        b.name
        for b in branches
        if b.name != current and not b.current and b.name not in locked_names
    ]


def select_all_branches(
    selected: SetStore[str],
    branches: Iterable[Branch],
    current: str | None,
    locked: Iterable[str],
) -> list[str]:
    """Add every selectable branch to *selected* and return the added names."""
    names = selectable_names(branches, current, locked)
    selected.add(names)
    return names
