"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationActor
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide persistence operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_for_user(self, notification_id: int, *, user_id: int) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationModel.user_id == user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        offset: int = 0,
        limit: int = 20,
        unread_only: bool = False,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel).filter(
            NotificationModel.user_id == user_id
        )
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        query = query.order_by(NotificationModel.id.desc()).offset(offset).limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_for_user(self, user_id: int, *, unread_only: bool = False) -> int:
        query = self.session.query(func.count(NotificationModel.id)).filter(
            NotificationModel.user_id == user_id
        )
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        return int(query.scalar() or 0)

    def count_unread(self, user_id: int) -> int:
        return self.count_for_user(user_id, unread_only=True)

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel(
            user_id=notification.user_id,
            actor_user_id=notification.actor_user_id,
            type=notification.type,
            title=notification.title,
            content=notification.content,
            related_type=notification.related_type,
            related_id=notification.related_id,
            is_read=False,
            read_at=None,
            created_at=ensure_app_naive_datetime(
                notification.created_at or now_in_app_timezone()
            ),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_id: int, *, user_id: int) -> bool:
        """Flip one unread notification to read; return whether a row changed."""

        changed = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id == notification_id,
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: ensure_app_naive_datetime(
                        now_in_app_timezone()
                    ),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return changed > 0

    def mark_all_as_read(self, user_id: int) -> int:
        """Flip every unread notification of ``user_id``; return the row count."""

        changed = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.user_id == user_id,
                NotificationModel.is_read.is_(False),
            )
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: ensure_app_naive_datetime(
                        now_in_app_timezone()
                    ),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return int(changed)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        actor = None
        if model.actor_user_id is not None and model.actor is not None:
            actor = NotificationActor(
                id=model.actor.id,
                username=model.actor.username,
                avatar=model.actor.avatar,
            )
        return Notification(
            id=model.id,
            user_id=model.user_id,
            actor_user_id=model.actor_user_id,
            type=model.type,
            title=model.title,
            content=model.content,
            related_type=model.related_type,
            related_id=model.related_id,
            is_read=bool(model.is_read),
            read_at=ensure_app_timezone(model.read_at),
            created_at=ensure_app_timezone(model.created_at),
            actor=actor,
        )


__all__ = ["NotificationRepository"]
