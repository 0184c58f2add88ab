"""Repository metadata store and the registry of known repository names."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..log import logger
from ..models import Repository
from ..navigation import goto, repository_route
from ..persistence.validation import validate
from ..stores import ScalarStore, SetStore

REPOSITORY_NAMES_KEY = "repositories_list"


def repository_names() -> SetStore[str]:
    """Names of every repository the user has opened (``store_repositories_list``)."""
    return SetStore.get_instance(REPOSITORY_NAMES_KEY, str)


class RepositoryStore(ScalarStore[Repository]):
    """The last known state of one repository.

    ``name`` is the repository's identity: storing a value under a new name
    moves the name registry along and navigates to the new route.
    """

    def __init__(self, key: str) -> None:
        super().__init__(key, Repository | None)

    def set(self, value: Repository | Mapping[str, Any] | None) -> None:
        """Store *value*; a plain mapping is validated into a ``Repository``.

        An invalid mapping is logged and leaves the store untouched.
        """
        if isinstance(value, Mapping):
            checked = validate(value, Repository)
            if not checked.success:
                logger.error("Ignoring invalid repository data: %s", checked.error)
                return
            value = checked.data
        old_name = self.state.name if self.state else None

        super().set(value)

        names = repository_names()
        if value is not None and value.name:
            if value.name != old_name:
                if old_name:
                    names.delete([old_name])
                goto(repository_route(value.name))
            names.add([value.name])
        elif old_name:
            names.delete([old_name])

    def clear(self) -> None:
        if self.state is not None and self.state.name:
            repository_names().delete([self.state.name])
        super().clear()


def get_repository_store(name: str | None) -> RepositoryStore | None:
    if not name:
        return None
    return RepositoryStore.get_common_instance((), ("repository", name))


def load_repositories() -> list[str]:
    """Re-read the name registry and make sure every known store exists."""
    names = repository_names()
    result = names.update_from_storage()
    if not result.success:
        logger.error("Error loading repositories list: %s", result.error)
    for name in names.list:
        get_repository_store(name)
    return names.list
