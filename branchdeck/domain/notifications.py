"""Notification feed.

Notifications are kept in push order (oldest first) keyed by id, so
``last`` is the newest one.  Once the feed grows past ``max_items`` the
oldest entries are pruned.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models import Notification, new_id, now_ms
from ..stores import MapStore

NOTIFICATIONS_KEY = "notifications"
DEFAULT_MAX_NOTIFICATIONS = 100


def create_notification_object(
    notification: Notification | Mapping[str, Any],
) -> Notification:
    """Fill in ``id``, ``date`` and ``feedback`` where the caller left them out."""
    if isinstance(notification, Notification):
        data = notification.model_dump(exclude_none=True)
    else:
        data = {k: v for k, v in notification.items() if v is not None}
    data.setdefault("id", new_id())
    data.setdefault("date", now_ms())
    data.setdefault("feedback", "default")
    return Notification.model_validate(data)


def is_notification(value: object) -> bool:
    if isinstance(value, Notification):
        return True
    return isinstance(value, Mapping) and "message" in value


class NotificationStore(MapStore[str, Notification]):
    def __init__(
        self, key: str = NOTIFICATIONS_KEY, max_items: int = DEFAULT_MAX_NOTIFICATIONS
    ) -> None:
        self.max_items = max_items
        super().__init__(key, str, Notification)

    @property
    def last(self) -> Notification | None:
        items = self.list
        return items[-1] if items else None

    def push(self, notification: Notification | Mapping[str, Any]) -> Notification:
        entry = create_notification_object(notification)
        entry_id = str(entry.id)
        state = {k: v for k, v in self._state().items() if k != entry_id}
        state[entry_id] = entry
        overflow = len(state) - self.max_items
        if overflow > 0:
            state = dict(list(state.items())[overflow:])
        self._set_state(state)
        self.update_storage()
        return entry


def get_notification_store(max_items: int | None = None) -> NotificationStore:
    """The application-wide feed; *max_items* only applies on first creation."""
    args = () if max_items is None else (max_items,)
    return NotificationStore.get_common_instance(args, (NOTIFICATIONS_KEY,))
