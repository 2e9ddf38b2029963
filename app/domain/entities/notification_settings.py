"""Domain entity describing the delivery preferences of a user."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_DND_START_HOUR = 23
DEFAULT_DND_END_HOUR = 8


@dataclass
class NotificationSettings:
    """Per-user type toggles and quiet-hours window."""

    user_id: int
    thread_reply_enabled: bool = True
    post_reply_enabled: bool = True
    mention_enabled: bool = True
    post_liked_enabled: bool = True
    follow_enabled: bool = True
    system_enabled: bool = True
    dnd_enabled: bool = False
    dnd_start_hour: int = DEFAULT_DND_START_HOUR
    dnd_end_hour: int = DEFAULT_DND_END_HOUR
    updated_at: datetime | None = None

    def is_type_enabled(self, notification_type: str) -> bool:
        """Return the toggle for ``notification_type``.

        Types without a toggle are always enabled.
        """

        field_name = TYPE_TOGGLE_FIELDS.get(notification_type)
        if field_name is None:
            return True
        return bool(getattr(self, field_name))


TYPE_TOGGLE_FIELDS: dict[str, str] = {
    "thread_reply": "thread_reply_enabled",
    "post_reply": "post_reply_enabled",
    "mention": "mention_enabled",
    "post_liked": "post_liked_enabled",
    "follow": "follow_enabled",
    "system": "system_enabled",
}

HOUR_FIELDS: frozenset[str] = frozenset({"dnd_start_hour", "dnd_end_hour"})
BOOLEAN_FIELDS: frozenset[str] = frozenset(TYPE_TOGGLE_FIELDS.values()) | {"dnd_enabled"}
UPDATABLE_FIELDS: frozenset[str] = BOOLEAN_FIELDS | HOUR_FIELDS


__all__ = [
    "BOOLEAN_FIELDS",
    "DEFAULT_DND_END_HOUR",
    "DEFAULT_DND_START_HOUR",
    "HOUR_FIELDS",
    "NotificationSettings",
    "TYPE_TOGGLE_FIELDS",
    "UPDATABLE_FIELDS",
]
