from .notification import (
    MarkAllReadRead,
    NotificationActorRead,
    NotificationPageRead,
    NotificationRead,
    NotificationSettingsRead,
    NotificationSettingsUpdate,
    SystemNotificationCreate,
    SystemNotificationCreated,
    UnreadCountRead,
)

__all__ = [
    "MarkAllReadRead",
    "NotificationActorRead",
    "NotificationPageRead",
    "NotificationRead",
    "NotificationSettingsRead",
    "NotificationSettingsUpdate",
    "SystemNotificationCreate",
    "SystemNotificationCreated",
    "UnreadCountRead",
]
