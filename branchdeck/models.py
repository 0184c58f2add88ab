"""Domain entities exchanged with the git backend and kept in stores.

Fields are snake_case in Python and camelCase on the wire and on disk;
both spellings validate.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Feedback = Literal["success", "danger", "warning", "default"]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Commit(_CamelModel):
    sha: str
    short_sha: str
    date: str
    message: str
    author: str
    email: str


class Branch(_CamelModel):
    """A local branch as reported by the backend.

    Unknown fields are kept so they survive a trip through storage.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    current: bool
    fully_merged: bool
    last_commit: Commit
    deleted_at: str | None = None
    is_reachable: bool | None = None


class DeletedBranch(Branch):
    """A branch in the deleted-branches log."""

    deleted_at: str
    is_reachable: bool = True

    @field_validator("deleted_at")
    @classmethod
    def _iso_timestamp(cls, value: str) -> str:
        parse_timestamp(value)
        return value

    @property
    def deleted_at_dt(self) -> datetime:
        return parse_timestamp(self.deleted_at)


class DeletedBranchesState(_CamelModel):
    branches: list[DeletedBranch] = Field(default_factory=list)


class Repository(_CamelModel):
    id: str
    name: str
    path: str
    current_branch: str
    branches_count: int
    branches: list[Branch] = Field(default_factory=list)


class Notification(_CamelModel):
    id: str | None = None
    title: str | None = None
    message: str | None = None
    feedback: Feedback = "default"
    date: int | None = None


# -- backend payloads -----------------------------------------------------------


class DeletedBranchInfo(_CamelModel):
    branch: Branch
    raw_output: str = Field(alias="raw_output")


class ConflictResolution(str, Enum):
    OVERWRITE = "Overwrite"
    RENAME = "Rename"
    SKIP = "Skip"


class RestoreBranchInfo(_CamelModel):
    original_name: str
    target_name: str
    commit_sha: str
    conflict_resolution: ConflictResolution | None = None


class ConflictDetails(_CamelModel):
    original_name: str | None = None
    conflicting_name: str | None = None


class RestoreBranchResult(_CamelModel):
    success: bool
    branch_name: str
    message: str
    requires_user_action: bool
    skipped: bool
    conflict_details: ConflictDetails | None = None
    branch: Branch | None = None
    processing: bool | None = None


# -- helpers --------------------------------------------------------------------


def utc_now_iso() -> str:
    """Current time as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def now_ms() -> int:
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def new_id() -> str:
    return str(uuid.uuid4())


def to_payload(model: BaseModel) -> dict[str, Any]:
    """Plain camelCase dict, as the backend expects."""
    return model.model_dump(mode="json", by_alias=True)
