"""Use cases for reading and updating notification settings."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import NotificationSettings
from app.infrastructure.repositories import NotificationSettingsRepository

from .common import ensure_user_exists
from .validators import ensure_valid_settings_patch


def get_notification_settings(session: Session, user_id: int) -> NotificationSettings:
    """Return the settings of ``user_id``, provisioning defaults on first access."""

    ensure_user_exists(session, user_id)
    return NotificationSettingsRepository(session).get_or_create(user_id)


def update_notification_settings(
    session: Session,
    user_id: int,
    patch: Mapping[str, Any],
) -> NotificationSettings:
    """Merge the provided fields over the current settings and persist them.

    Fields missing from ``patch`` keep their current values.
    """

    changes = ensure_valid_settings_patch(patch)
    current = get_notification_settings(session, user_id)
    if not changes:
        return current
    return NotificationSettingsRepository(session).update(replace(current, **changes))


__all__ = ["get_notification_settings", "update_notification_settings"]
