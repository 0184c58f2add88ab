"""Log of branches deleted through the app, newest first."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from ..log import logger
from ..models import (
    Branch,
    DeletedBranch,
    DeletedBranchesState,
    parse_timestamp,
    utc_now_iso,
)
from ..persistence.validation import validate
from ..stores import ScalarStore


def _now() -> str:
    return utc_now_iso()


_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _deleted_at_key(branch: DeletedBranch) -> datetime:
    """Sort key; entries with an unreadable timestamp sort last."""
    try:
        return parse_timestamp(branch.deleted_at)
    except ValueError:
        return _OLDEST


class DeletedBranchesStore(ScalarStore[DeletedBranchesState]):
    """Deleted branches of one repository.

    ``list`` is the branch log itself, sorted by ``deleted_at`` descending.
    Entries start out reachable; a later reachability check may flip that.
    """

    def __init__(self, key: str) -> None:
        super().__init__(key, DeletedBranchesState, DeletedBranchesState())

    @property
    def branches(self) -> list[DeletedBranch]:
        return self.list

    def get_as_list(self) -> list[DeletedBranch]:
        state = self.state
        return list(state.branches) if state is not None else []

    def find(self, name: str) -> DeletedBranch | None:
        return next((b for b in self.list if b.name == name), None)

    def add_deleted_branch(
        self, branch: Branch | Mapping[str, Any]
    ) -> DeletedBranch | None:
        """Log *branch* as deleted now; mappings are validated as a ``Branch``."""
        state = self.get()
        if state is None:
            return None
        if isinstance(branch, Mapping):
            checked = validate(branch, Branch)
            if not checked.success:
                logger.error("Ignoring invalid deleted branch: %s", checked.error)
                return None
            branch = checked.data

        data = branch.model_dump()
        data.update(deleted_at=_now(), is_reachable=True)
        entry = DeletedBranch.model_validate(data)

        # Stable sort: on equal timestamps the new entry stays in front.
        branches = sorted(
            [entry, *state.branches],
            key=_deleted_at_key,
            reverse=True,
        )
        self.set(DeletedBranchesState(branches=branches))
        return entry

    def remove_deleted_branch(self, name: str) -> None:
        state = self.get()
        if state is None:
            return
        remaining = [b for b in state.branches if b.name != name]
        self.set(DeletedBranchesState(branches=remaining))

    def update_branch_reachability(self, name: str, is_reachable: bool) -> None:
        state = self.get()
        if state is None:
            return
        branches = list(state.branches)
        for index, branch in enumerate(branches):
            if branch.name == name:
                branches[index] = branch.model_copy(
                    update={"is_reachable": is_reachable}
                )
                self.set(DeletedBranchesState(branches=branches))
                return


def get_deleted_branches_store(
    repository_id: str | None,
) -> DeletedBranchesStore | None:
    if not repository_id:
        return None
    return DeletedBranchesStore.get_common_instance(
        (), ("deleted_branches", repository_id)
    )
