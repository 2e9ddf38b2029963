"""Domain entities exposed by the application."""

from .notification import (
    MarkAllReadResult,
    Notification,
    NotificationActor,
    NotificationCandidate,
    NotificationPage,
    NotificationType,
)
from .notification_event import NotificationEvent, NotificationEventType
from .notification_settings import NotificationSettings
from .user import ADMIN_ROLE, User

__all__ = [
    "ADMIN_ROLE",
    "MarkAllReadResult",
    "Notification",
    "NotificationActor",
    "NotificationCandidate",
    "NotificationEvent",
    "NotificationEventType",
    "NotificationPage",
    "NotificationSettings",
    "NotificationType",
    "User",
]
