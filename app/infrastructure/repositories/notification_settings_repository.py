"""Persistence helpers for per-user notification settings."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import NotificationSettings
from app.infrastructure.models import NotificationSettingsModel
from app.utils import ensure_app_timezone, now_in_app_naive_datetime

logger = logging.getLogger(__name__)


class NotificationSettingsRepository:
    """Load and store :class:`NotificationSettings`, one row per user."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> NotificationSettings | None:
        model = self.session.get(NotificationSettingsModel, user_id)
        return self._to_entity(model) if model else None

    def get_or_create(self, user_id: int) -> NotificationSettings:
        """Return the settings row for ``user_id``, inserting defaults if absent."""

        existing = self.get(user_id)
        if existing is not None:
            return existing

        defaults = NotificationSettings(user_id=user_id)
        model = NotificationSettingsModel(user_id=user_id)
        self._apply_entity_to_model(model, defaults)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            # Another request provisioned the row first.
            self.session.rollback()
            logger.debug("Settings row for user %s already provisioned", user_id)
            concurrent = self.get(user_id)
            if concurrent is None:
                raise
            return concurrent
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, settings: NotificationSettings) -> NotificationSettings:
        model = self.session.get(NotificationSettingsModel, settings.user_id)
        if model is None:
            msg = f"Notification settings for user {settings.user_id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, settings)
        model.updated_at = now_in_app_naive_datetime()
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationSettingsModel, settings: NotificationSettings
    ) -> None:
        model.thread_reply_enabled = settings.thread_reply_enabled
        model.post_reply_enabled = settings.post_reply_enabled
        model.mention_enabled = settings.mention_enabled
        model.post_liked_enabled = settings.post_liked_enabled
        model.follow_enabled = settings.follow_enabled
        model.system_enabled = settings.system_enabled
        model.dnd_enabled = settings.dnd_enabled
        model.dnd_start_hour = settings.dnd_start_hour
        model.dnd_end_hour = settings.dnd_end_hour

    @staticmethod
    def _to_entity(model: NotificationSettingsModel) -> NotificationSettings:
        return NotificationSettings(
            user_id=model.user_id,
            thread_reply_enabled=bool(model.thread_reply_enabled),
            post_reply_enabled=bool(model.post_reply_enabled),
            mention_enabled=bool(model.mention_enabled),
            post_liked_enabled=bool(model.post_liked_enabled),
            follow_enabled=bool(model.follow_enabled),
            system_enabled=bool(model.system_enabled),
            dnd_enabled=bool(model.dnd_enabled),
            dnd_start_hour=int(model.dnd_start_hour),
            dnd_end_hour=int(model.dnd_end_hour),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["NotificationSettingsRepository"]
