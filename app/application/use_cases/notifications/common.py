"""Helpers shared by the notification use cases."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app.domain.entities import NotificationEvent, NotificationEventType
from app.domain.exceptions import NotFoundError
from app.infrastructure.notifications import EventBus
from app.infrastructure.repositories import NotificationRepository, UserRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def ensure_user_exists(session: Session, user_id: int) -> None:
    """Raise :class:`NotFoundError` when ``user_id`` is not in the directory."""

    if not UserRepository(session).exists(user_id):
        raise NotFoundError("User not found")


def publish_notification_event(
    session: Session,
    bus: EventBus,
    *,
    user_id: int,
    event_type: NotificationEventType,
    notification_id: int | None = None,
) -> NotificationEvent:
    """Publish ``event_type`` carrying the unread count as it is right now."""

    event = NotificationEvent(
        type=event_type,
        user_id=user_id,
        notification_id=notification_id,
        unread_count=NotificationRepository(session).count_unread(user_id),
        created_at=now_in_app_timezone(),
    )
    delivered = bus.publish(user_id, event)
    logger.debug(
        "Published %s for user %s to %s subscriber(s)", event_type, user_id, delivered
    )
    return event


__all__ = ["ensure_user_exists", "publish_notification_event"]
