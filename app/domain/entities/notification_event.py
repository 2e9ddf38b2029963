"""Domain entity describing a notification lifecycle event."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

NotificationEventType = Literal[
    "notification_created",
    "notification_read",
    "notification_read_all",
]


@dataclass(frozen=True)
class NotificationEvent:
    """Event routed to the live connections of one user."""

    type: NotificationEventType
    user_id: int
    unread_count: int
    created_at: datetime
    notification_id: int | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON frame pushed to stream clients."""

        payload: dict[str, Any] = {
            "type": self.type,
            "userId": self.user_id,
            "unreadCount": self.unread_count,
            "createdAt": self.created_at.isoformat(),
        }
        if self.notification_id is not None:
            payload["notificationId"] = self.notification_id
        return payload


__all__ = ["NotificationEvent", "NotificationEventType"]
