"""Entry point for the branchdeck CLI."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.table import Table

from . import __version__
from .log import logger, setup_logging
from .persistence import FileStorage, configure_storage
from .preferences import Preferences, branchdeck_home, load_preferences


def _print_repositories() -> None:
    """Print every known repository and its branch count."""
    from .domain import get_repository_store, load_repositories

    table = Table(title="Repositories")
    table.add_column("Name", style="bold")
    table.add_column("Path")
    table.add_column("Branch")
    table.add_column("Branches", justify="right")

    for name in load_repositories():
        store = get_repository_store(name)
        repository = store.get() if store is not None else None
        if repository is None:
            table.add_row(name, "-", "-", "-")
            continue
        table.add_row(
            repository.name,
            repository.path,
            repository.current_branch or "-",
            str(repository.branches_count),
        )

    console = Console()
    if table.row_count:
        console.print(table)
    else:
        console.print("No repositories yet.")


def _configure(prefs: Preferences, storage_override: str | None) -> Path:
    home = branchdeck_home()
    setup_logging(prefs.logging.level, home / "branchdeck.log")
    path = Path(storage_override).expanduser() if storage_override else None
    path = path or prefs.storage.resolved_path(home)
    configure_storage(FileStorage(path, quota_bytes=prefs.storage.quota_bytes))
    logger.info("branchdeck %s using storage %s", __version__, path)
    return path


def main(argv: list[str] | None = None) -> None:
    """Run branchdeck."""
    parser = argparse.ArgumentParser(description="branchdeck")
    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"branchdeck {__version__}",
    )
    parser.add_argument(
        "--storage",
        type=str,
        metavar="PATH",
        help="Storage file to use instead of the configured one",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print known repositories and exit",
    )
    parser.add_argument(
        "--clear-notifications",
        action="store_true",
        help="Drop every stored notification and exit",
    )

    args = parser.parse_args(argv)

    prefs = load_preferences()
    _configure(prefs, args.storage)

    if args.list:
        _print_repositories()
        return

    if args.clear_notifications:
        from .domain import get_notification_store

        get_notification_store(prefs.notifications.max_items).clear()
        print("Notifications cleared.")
        return

    from .app import BranchDeckApp

    BranchDeckApp(notifications_max=prefs.notifications.max_items).run()


if __name__ == "__main__":
    main()
