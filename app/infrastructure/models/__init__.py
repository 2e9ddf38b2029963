"""ORM models used by the application infrastructure."""

from .user import UserModel
from .notification import NotificationModel
from .notification_settings import NotificationSettingsModel

__all__ = [
    "UserModel",
    "NotificationModel",
    "NotificationSettingsModel",
]
