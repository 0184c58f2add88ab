"""One-line view of the newest notification."""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from ..models import Notification

_FEEDBACK_STYLE = {
    "success": "green",
    "danger": "bold red",
    "warning": "yellow",
    "default": "",
}


def format_notification(notification: Notification | None) -> str:
    if notification is None:
        return ""
    parts = [p for p in (notification.title, notification.message) if p]
    return " - ".join(parts) or "(empty notification)"


class NotificationBar(Static):
    """Shows ``NotificationStore.last``; call :meth:`show` after a change."""

    DEFAULT_CSS = """
    NotificationBar {
        height: 1;
        padding: 0 1;
        background: $surface-lighten-1;
        color: $text-muted;
    }
    """

    def __init__(self, **kwargs: object) -> None:
        super().__init__("", **kwargs)  # type: ignore[arg-type]
        self.current_text = ""

    def show(self, notification: Notification | None) -> None:
        self.current_text = format_notification(notification)
        style = _FEEDBACK_STYLE.get(notification.feedback, "") if notification else ""
        self.update(Text(self.current_text, style=style))
