"""Repository implementations for infrastructure layer."""

from .user_repository import UserRepository
from .notification_repository import NotificationRepository
from .notification_settings_repository import NotificationSettingsRepository

__all__ = [
    "UserRepository",
    "NotificationRepository",
    "NotificationSettingsRepository",
]
