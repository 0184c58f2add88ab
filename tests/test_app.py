"""Textual Pilot tests for BranchDeckApp.

Tests use ``app.run_test()`` to spin up a headless Textual app over the
in-memory storage installed by the autouse fixture.
"""

from __future__ import annotations

import pytest
from textual.widgets import DataTable, OptionList

from branchdeck.app import BranchDeckApp
from branchdeck.domain import (
    get_locked_branches_store,
    get_notification_store,
    get_repository_store,
    get_selected_branches_store,
)
from branchdeck.navigation import goto
from branchdeck.widgets import NotificationBar, RepositoryListScreen, RepositoryScreen


# ── Fixtures ────────────────────────────────────────────────────────


@pytest.fixture()
def app(sample_repo):
    get_repository_store(sample_repo.name).set(sample_repo)
    return BranchDeckApp()


async def _open_repo(app, pilot, name: str = "webapp") -> RepositoryScreen:
    goto(f"/repos/{name}")
    await pilot.pause(0.1)
    assert isinstance(app.screen, RepositoryScreen)
    return app.screen


def _marker(screen: RepositoryScreen, branch: str) -> str:
    table = screen.query_one("#branch-table", DataTable)
    return str(table.get_row(branch)[0])


# ── Widget-tree smoke tests ─────────────────────────────────────────


class TestAppMount:
    """Verify the app mounts on the repository list."""

    @pytest.mark.asyncio
    async def test_starts_on_repository_list(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            assert isinstance(app.screen, RepositoryListScreen)
            options = app.screen.query_one("#repo-list", OptionList)
            assert options.option_count == 1
            assert options.get_option_at_index(0).id == "webapp"

    @pytest.mark.asyncio
    async def test_empty_notification_bar(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            assert app.screen.query_one(NotificationBar).current_text == ""


# ── Navigation ──────────────────────────────────────────────────────


class TestNavigation:
    @pytest.mark.asyncio
    async def test_goto_opens_repository(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            screen = await _open_repo(app, pilot)
            assert screen.repository_name == "webapp"
            table = screen.query_one("#branch-table", DataTable)
            assert table.row_count == 4

    @pytest.mark.asyncio
    async def test_escape_returns_home(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            await _open_repo(app, pilot)
            await pilot.press("escape")
            await pilot.pause()
            assert isinstance(app.screen, RepositoryListScreen)

    @pytest.mark.asyncio
    async def test_root_route_returns_home(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            await _open_repo(app, pilot)
            goto("/")
            await pilot.pause()
            assert isinstance(app.screen, RepositoryListScreen)

    @pytest.mark.asyncio
    async def test_unknown_route_stays_put(self, app):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            goto("/settings")
            await pilot.pause()
            assert isinstance(app.screen, RepositoryListScreen)

    @pytest.mark.asyncio
    async def test_storing_new_repository_navigates(self, app, sample_repo):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            renamed = sample_repo.model_copy(update={"name": "api", "id": "repo-2"})
            get_repository_store("api").set(renamed)
            await pilot.pause()
            assert isinstance(app.screen, RepositoryScreen)
            assert app.screen.repository_name == "api"


# ── Key-binding tests ───────────────────────────────────────────────


class TestBranchBindings:
    @pytest.mark.asyncio
    async def test_space_cannot_select_current_branch(self, app, sample_repo):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            screen = await _open_repo(app, pilot)
            await pilot.press("space")
            await pilot.pause()
            assert get_selected_branches_store(sample_repo.id).list == []
            assert _marker(screen, "main") == "*"

    @pytest.mark.asyncio
    async def test_space_toggles_selection(self, app, sample_repo):
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            screen = await _open_repo(app, pilot)
            await pilot.press("down", "space")
            await pilot.pause()
            assert get_selected_branches_store(sample_repo.id).list == ["feature/login"]
            assert _marker(screen, "feature/login") == "x"

            await pilot.press("space")
            await pilot.pause()
            assert get_selected_branches_store(sample_repo.id).list == []

    @pytest.mark.asyncio
    async def test_lock_unselects_and_blocks_selection(self, app, sample_repo):
        selected = get_selected_branches_store(sample_repo.id)
        selected.add(["feature/login"])
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            screen = await _open_repo(app, pilot)
            await pilot.press("down", "l")
            await pilot.pause()
            assert get_locked_branches_store(sample_repo.id).list == ["feature/login"]
            assert selected.list == []
            assert _marker(screen, "feature/login") == "L"

            await pilot.press("space")
            await pilot.pause()
            assert selected.list == []

    @pytest.mark.asyncio
    async def test_select_all_and_clear(self, app, sample_repo):
        get_locked_branches_store(sample_repo.id).add(["experiment"])
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            screen = await _open_repo(app, pilot)
            await pilot.press("a")
            await pilot.pause()
            selected = get_selected_branches_store(sample_repo.id)
            assert selected.list == ["feature/login", "bugfix/crash"]
            assert _marker(screen, "experiment") == "L"

            await pilot.press("c")
            await pilot.pause()
            assert selected.list == []
            assert _marker(screen, "bugfix/crash") == ""


class TestNotificationBar:
    @pytest.mark.asyncio
    async def test_shows_latest_notification(self, app):
        get_notification_store().push({"title": "Old", "message": "first"})
        get_notification_store().push(
            {"title": "Branches deleted", "message": "Deleted 1", "feedback": "success"}
        )
        async with app.run_test(size=(120, 40)) as pilot:
            await pilot.pause()
            bar = app.screen.query_one(NotificationBar)
            assert bar.current_text == "Branches deleted - Deleted 1"
