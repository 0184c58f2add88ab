"""Textual widgets and screens for branchdeck."""

from .notification_bar import NotificationBar
from .screens import RepositoryListScreen, RepositoryScreen

__all__ = ["NotificationBar", "RepositoryListScreen", "RepositoryScreen"]
