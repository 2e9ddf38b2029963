"""Use cases for creating, reading and delivering notifications."""

from .create_notification import create_notification
from .list_notifications import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    get_unread_count,
    list_notifications,
)
from .policy import DeliveryDecision, evaluate_delivery, is_within_quiet_hours
from .read_state import mark_all_notifications_read, mark_notification_read
from .settings import get_notification_settings, update_notification_settings
from .triggers import (
    PREVIEW_LENGTH,
    build_preview,
    create_system_notification,
    extract_mentions,
    notify_post_created,
    notify_post_liked,
    notify_user_followed,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "PREVIEW_LENGTH",
    "DeliveryDecision",
    "build_preview",
    "create_notification",
    "create_system_notification",
    "evaluate_delivery",
    "extract_mentions",
    "get_notification_settings",
    "get_unread_count",
    "is_within_quiet_hours",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_post_created",
    "notify_post_liked",
    "notify_user_followed",
    "update_notification_settings",
]
