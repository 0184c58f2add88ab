"""Screens for the repository list and a single repository."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, OptionList, Static
from textual.widgets.option_list import Option

from ..domain import (
    get_locked_branches_store,
    get_notification_store,
    get_repository_store,
    get_selected_branches_store,
    repository_names,
)
from ..models import Branch, Repository
from ..selection import select_all_branches, selectable_names
from .notification_bar import NotificationBar


class RepositoryListScreen(Screen):
    """Every repository name in the registry."""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("Repositories", classes="screen-title")
        yield OptionList(id="repo-list")
        yield NotificationBar(id="notification-bar")
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_names()

    def refresh_names(self) -> None:
        option_list = self.query_one("#repo-list", OptionList)
        option_list.clear_options()
        names = repository_names().list
        if names:
            option_list.add_options([Option(name, id=name) for name in names])
        self.query_one(NotificationBar).show(get_notification_store().last)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option.id:
            self.app.open_repository(event.option.id)  # type: ignore[attr-defined]


class RepositoryScreen(Screen):
    """Branches of one repository with selection and lock markers.

    Markers: ``*`` checked out, ``L`` locked, ``x`` selected.
    """

    BINDINGS = [
        Binding("space", "toggle_select", "Select"),
        Binding("l", "toggle_lock", "Lock"),
        Binding("a", "select_all", "Select all"),
        Binding("c", "clear_selection", "Clear"),
    ]

    def __init__(self, repository_name: str, **kwargs: object) -> None:
        super().__init__(**kwargs)  # type: ignore[arg-type]
        self.repository_name = repository_name

    @property
    def repository(self) -> Repository | None:
        store = get_repository_store(self.repository_name)
        return store.get() if store is not None else None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(self.repository_name, id="repo-title", classes="screen-title")
        yield DataTable(id="branch-table", cursor_type="row")
        yield NotificationBar(id="notification-bar")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#branch-table", DataTable)
        table.add_columns("", "Branch", "Last commit", "Merged")
        self.refresh_rows()

    # -- rendering ----------------------------------------------------------------

    def _markers(self, branch: Branch, selected: set[str], locked: set[str]) -> str:
        marks = ""
        if branch.current:
            marks += "*"
        if branch.name in locked:
            marks += "L"
        if branch.name in selected:
            marks += "x"
        return marks

    def refresh_rows(self) -> None:
        table = self.query_one("#branch-table", DataTable)
        cursor = table.cursor_row
        table.clear()
        repository = self.repository
        if repository is not None:
            selected = set(get_selected_branches_store(repository.id).state)
            locked = set(get_locked_branches_store(repository.id).state)
            for branch in repository.branches:
                commit = branch.last_commit
                table.add_row(
                    self._markers(branch, selected, locked),
                    branch.name,
                    f"{commit.short_sha} {commit.message}",
                    "yes" if branch.fully_merged else "",
                    key=branch.name,
                )
            if repository.branches:
                table.move_cursor(row=min(cursor, len(repository.branches) - 1))
        self.query_one(NotificationBar).show(get_notification_store().last)

    def _cursor_branch(self) -> str | None:
        table = self.query_one("#branch-table", DataTable)
        if table.row_count == 0:
            return None
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        return row_key.value

    # -- actions ------------------------------------------------------------------

    def action_toggle_select(self) -> None:
        repository = self.repository
        name = self._cursor_branch()
        if repository is None or name is None:
            return
        selected = get_selected_branches_store(repository.id)
        locked = get_locked_branches_store(repository.id)
        if selected.has(name):
            selected.delete([name])
        elif name in selectable_names(
            repository.branches, repository.current_branch, locked.state
        ):
            selected.add([name])
        else:
            self.app.bell()
            return
        self.refresh_rows()

    def action_toggle_lock(self) -> None:
        repository = self.repository
        name = self._cursor_branch()
        if repository is None or name is None:
            return
        locked = get_locked_branches_store(repository.id)
        if locked.has(name):
            locked.delete([name])
        else:
            locked.add([name])
            get_selected_branches_store(repository.id).delete([name])
        self.refresh_rows()

    def action_select_all(self) -> None:
        repository = self.repository
        if repository is None:
            return
        select_all_branches(
            get_selected_branches_store(repository.id),
            repository.branches,
            repository.current_branch,
            get_locked_branches_store(repository.id).state,
        )
        self.refresh_rows()

    def action_clear_selection(self) -> None:
        repository = self.repository
        if repository is None:
            return
        get_selected_branches_store(repository.id).clear()
        self.refresh_rows()
