"""Route changes requested from below the UI.

Stores call :func:`goto`; whichever UI is running installs the handler that
actually changes screens.  Without a handler the request is only logged.
"""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import quote

from .log import logger

Navigator = Callable[[str], None]

_navigator: Navigator | None = None


def set_navigator(navigator: Navigator | None) -> None:
    global _navigator
    _navigator = navigator


def repository_route(name: str) -> str:
    return f"/repos/{quote(name, safe='')}"


def goto(route: str) -> None:
    if _navigator is None:
        logger.debug("navigation to %s requested with no navigator installed", route)
        return
    _navigator(route)
