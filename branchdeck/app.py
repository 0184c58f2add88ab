"""Textual application shell over the stores."""

from __future__ import annotations

import logging
from urllib.parse import unquote

from textual.app import App
from textual.binding import Binding

from .domain import get_notification_store, load_repositories
from .navigation import set_navigator
from .widgets import RepositoryListScreen, RepositoryScreen

log = logging.getLogger(__name__)

_REPO_PREFIX = "/repos/"


class BranchDeckApp(App):
    """Repository list plus one screen per repository."""

    TITLE = "branchdeck"

    CSS = """
    .screen-title {
        height: 1;
        padding: 0 1;
        text-style: bold;
    }
    #branch-table, #repo-list {
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("escape", "go_home", "Repositories"),
    ]

    def __init__(self, notifications_max: int | None = None) -> None:
        super().__init__()
        self.notifications_max = notifications_max

    def on_mount(self) -> None:
        set_navigator(self.navigate)
        # Sizes the shared notification store before any screen reads it.
        get_notification_store(self.notifications_max)
        load_repositories()
        self.push_screen(RepositoryListScreen())

    def on_unmount(self) -> None:
        set_navigator(None)

    def navigate(self, route: str) -> None:
        """Handle a route requested through :func:`branchdeck.navigation.goto`."""
        if route.startswith(_REPO_PREFIX):
            name = unquote(route[len(_REPO_PREFIX) :])
            if name:
                self.open_repository(name)
                return
        elif route in ("", "/"):
            self.go_home()
            return
        log.warning("Unknown route %r", route)

    def open_repository(self, name: str) -> None:
        current = self.screen
        if isinstance(current, RepositoryScreen) and current.repository_name == name:
            current.refresh_rows()
            return
        self.switch_screen(RepositoryScreen(name))

    def go_home(self) -> None:
        if isinstance(self.screen, RepositoryListScreen):
            self.screen.refresh_names()
            return
        self.switch_screen(RepositoryListScreen())

    def action_go_home(self) -> None:
        self.go_home()
