"""Per-repository branch selection, lock and search stores.

These are plain generic stores.  Rules such as "select all skips the current
and the locked branches" belong to the caller.
"""

from __future__ import annotations

from ..stores import ScalarStore, SetStore


def get_selected_branches_store(repository: str) -> SetStore[str]:
    return SetStore.get_instance(("selected", repository), str)


def get_locked_branches_store(repository: str) -> SetStore[str]:
    return SetStore.get_instance(("locked", repository), str)


def get_search_branches_store(repository: str) -> ScalarStore[str | None]:
    return ScalarStore.get_instance(("search", repository), str | None)
