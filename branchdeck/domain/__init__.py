"""Stores with business rules, built on the generic stores."""

from .branches import (
    get_locked_branches_store,
    get_search_branches_store,
    get_selected_branches_store,
)
from .deleted_branches import DeletedBranchesStore, get_deleted_branches_store
from .notifications import (
    NotificationStore,
    create_notification_object,
    get_notification_store,
    is_notification,
)
from .repository import (
    RepositoryStore,
    get_repository_store,
    load_repositories,
    repository_names,
)

__all__ = [
    "DeletedBranchesStore",
    "NotificationStore",
    "RepositoryStore",
    "create_notification_object",
    "get_deleted_branches_store",
    "get_locked_branches_store",
    "get_notification_store",
    "get_repository_store",
    "get_search_branches_store",
    "get_selected_branches_store",
    "is_notification",
    "load_repositories",
    "repository_names",
]
