"""Backend calls and the store updates that follow them.

The git backend is injected as ``execute(name, params)``; it may return
parsed data or a JSON string.  Every payload is validated before any store
is touched.  Updates spanning several stores are not transactional: if one
step fails the earlier ones stay applied.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from typing import Any

from .domain import (
    DeletedBranchesStore,
    get_deleted_branches_store,
    get_notification_store,
    get_repository_store,
    get_selected_branches_store,
)
from .errors import AppError, create_error
from .log import logger
from .models import (
    ConflictResolution,
    DeletedBranch,
    DeletedBranchInfo,
    Repository,
    RestoreBranchInfo,
    RestoreBranchResult,
    to_payload,
)
from .persistence.validation import get_adapter

CommandExecutor = Callable[[str, dict[str, Any]], Any]


def _invoke(
    execute: CommandExecutor,
    name: str,
    params: dict[str, Any],
    schema: Any,
    default_message: str = "Unknown error",
) -> Any:
    try:
        payload = execute(name, params)
        # JSON text is decoded unless the answer itself is a string.
        if isinstance(payload, (str, bytes)) and schema is not str:
            payload = json.loads(payload)
        return get_adapter(schema).validate_python(payload)
    except AppError:
        raise
    except Exception as exc:
        logger.debug("command %s failed", name, exc_info=True)
        raise create_error(exc, default_message=default_message) from exc


def _deleted_store(repository: Repository) -> DeletedBranchesStore:
    store = get_deleted_branches_store(repository.id)
    if store is None:
        raise AppError("Repository has no id", kind="missing_repository")
    return store


def _deleted_entry(store: DeletedBranchesStore, name: str) -> DeletedBranch:
    entry = store.find(name)
    if entry is None:
        raise AppError(
            f"Branch '{name}' is not in the deleted branches log",
            kind="branch_not_found",
        )
    return entry


def load_repository(execute: CommandExecutor, path: str) -> Repository:
    """Fetch the repository at *path* and store it (navigates on a new name)."""
    if not path:
        raise AppError("Repository path is required", kind="missing_path")
    repository = _invoke(execute, "get_repository_by_path", {"path": path}, Repository)
    store = get_repository_store(repository.name)
    if store is not None:
        store.set(repository)
    return repository


def switch_branch(
    execute: CommandExecutor, repository: Repository, name: str
) -> str:
    """Check out *name*, then reload the repository so its store is current.

    Returns the branch the backend reports as checked out.
    """
    if not repository.path:
        raise AppError(
            "No path provided",
            kind="missing_path",
            description="A repository path is required to switch branches",
        )
    if not name:
        raise AppError(
            "Invalid input data",
            kind="validation_error",
            description="Branch name is required",
        )
    current: str = _invoke(
        execute,
        "switch_branch",
        {"path": repository.path, "branch": name},
        str,
        default_message="Failed to switch branch",
    )
    load_repository(execute, repository.path)
    return current


def delete_branches(
    execute: CommandExecutor, repository: Repository, names: Sequence[str]
) -> list[DeletedBranchInfo]:
    """Delete *names*, unselect them and record them in the deleted log."""
    if not names:
        raise AppError(
            "No branches selected",
            kind="missing_branches",
            description="Please select at least one branch to delete",
        )
    infos: list[DeletedBranchInfo] = _invoke(
        execute,
        "delete_branches",
        {"path": repository.path, "branches": list(names)},
        list[DeletedBranchInfo],
    )

    selected = get_selected_branches_store(repository.id)
    deleted = _deleted_store(repository)
    for info in infos:
        selected.delete([info.branch.name])
        deleted.add_deleted_branch(info.branch)

    deleted_names = ", ".join(info.branch.name for info in infos)
    get_notification_store().push(
        {
            "title": "Branches deleted",
            "message": f"Deleted {len(infos)} branch(es): {deleted_names}",
            "feedback": "success",
        }
    )
    return infos


def restore_deleted_branch(
    execute: CommandExecutor,
    repository: Repository,
    name: str,
    target_name: str | None = None,
    conflict_resolution: ConflictResolution | None = None,
) -> RestoreBranchResult:
    """Recreate a deleted branch from its last commit."""
    deleted = _deleted_store(repository)
    entry = _deleted_entry(deleted, name)
    info = RestoreBranchInfo(
        original_name=name,
        target_name=target_name or name,
        commit_sha=entry.last_commit.sha,
        conflict_resolution=conflict_resolution,
    )
    result: RestoreBranchResult = _invoke(
        execute,
        "restore_deleted_branch",
        {"path": repository.path, "branchInfo": to_payload(info)},
        RestoreBranchResult,
    )

    notifications = get_notification_store()
    if result.success and not result.skipped:
        deleted.remove_deleted_branch(name)
        notifications.push(
            {
                "title": "Branch restored",
                "message": result.message,
                "feedback": "success",
            }
        )
    elif result.requires_user_action:
        notifications.push(
            {
                "title": "Restore needs attention",
                "message": result.message,
                "feedback": "warning",
            }
        )
    elif result.skipped:
        notifications.push({"title": "Restore skipped", "message": result.message})
    else:
        notifications.push(
            {
                "title": "Restore failed",
                "message": result.message,
                "feedback": "danger",
            }
        )
    return result


def check_branch_reachability(
    execute: CommandExecutor, repository: Repository, name: str
) -> bool:
    """Ask the backend whether a deleted branch's commit still exists."""
    deleted = _deleted_store(repository)
    entry = _deleted_entry(deleted, name)
    reachable: bool = _invoke(
        execute,
        "is_commit_reachable",
        {"path": repository.path, "commitSha": entry.last_commit.sha},
        bool,
    )
    deleted.update_branch_reachability(name, reachable)
    return reachable
