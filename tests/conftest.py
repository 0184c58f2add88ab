"""Shared test fixtures for the branchdeck test suite."""

from __future__ import annotations

import pytest

from branchdeck.models import Branch, Commit, Repository
from branchdeck.navigation import set_navigator
from branchdeck.persistence import MemoryStorage, configure_storage
from branchdeck.stores import get_registry


@pytest.fixture(autouse=True)
def storage():
    """Fresh in-memory medium and an empty store registry for every test."""
    medium = MemoryStorage()
    configure_storage(medium)
    get_registry().reset()
    set_navigator(None)
    yield medium
    get_registry().reset()
    set_navigator(None)
    configure_storage(None)


# -- Domain fixtures ----------------------------------------------------------


def make_commit(sha: str = "a1b2c3d4e5f6", message: str = "Initial commit") -> Commit:
    return Commit(
        sha=sha,
        short_sha=sha[:7],
        date="2026-01-15T10:30:00Z",
        message=message,
        author="Dana Example",
        email="dana@example.com",
    )


def make_branch(
    name: str, *, current: bool = False, fully_merged: bool = False, sha: str | None = None
) -> Branch:
    return Branch(
        name=name,
        current=current,
        fully_merged=fully_merged,
        last_commit=make_commit(sha or (name.encode().hex() + "0" * 12)[:12]),
    )


@pytest.fixture
def sample_branches() -> list[Branch]:
    return [
        make_branch("main", current=True),
        make_branch("feature/login", fully_merged=True, sha="111111111111"),
        make_branch("bugfix/crash", sha="222222222222"),
        make_branch("experiment", sha="333333333333"),
    ]


@pytest.fixture
def sample_repo(sample_branches) -> Repository:
    return Repository(
        id="repo-1",
        name="webapp",
        path="/home/dana/src/webapp",
        current_branch="main",
        branches_count=len(sample_branches),
        branches=sample_branches,
    )
