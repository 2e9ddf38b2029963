"""Aggregate application use cases."""

from .notifications import (
    create_notification,
    create_system_notification,
    mark_all_notifications_read,
    mark_notification_read,
)

__all__ = [
    "create_notification",
    "create_system_notification",
    "mark_all_notifications_read",
    "mark_notification_read",
]
