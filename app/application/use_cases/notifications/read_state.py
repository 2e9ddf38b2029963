"""Use cases moving notifications from unread to read."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import MarkAllReadResult, Notification
from app.domain.exceptions import NotFoundError
from app.infrastructure.notifications import EventBus
from app.infrastructure.repositories import NotificationRepository

from .common import ensure_user_exists, publish_notification_event


def mark_notification_read(
    session: Session,
    bus: EventBus,
    *,
    user_id: int,
    notification_id: int,
) -> Notification:
    """Mark one notification of ``user_id`` as read.

    Repeated calls are no-ops; an event is only published on the actual
    transition. Raises :class:`NotFoundError` when the notification does not
    exist or belongs to another user.
    """

    ensure_user_exists(session, user_id)
    repository = NotificationRepository(session)
    changed = repository.mark_as_read(notification_id, user_id=user_id)

    notification = repository.get_for_user(notification_id, user_id=user_id)
    if notification is None:
        raise NotFoundError("Notification not found")

    if changed:
        publish_notification_event(
            session,
            bus,
            user_id=user_id,
            event_type="notification_read",
            notification_id=notification_id,
        )
    return notification


def mark_all_notifications_read(
    session: Session,
    bus: EventBus,
    *,
    user_id: int,
) -> MarkAllReadResult:
    """Mark every unread notification of ``user_id`` as read."""

    ensure_user_exists(session, user_id)
    repository = NotificationRepository(session)
    updated = repository.mark_all_as_read(user_id)

    if updated > 0:
        event = publish_notification_event(
            session, bus, user_id=user_id, event_type="notification_read_all"
        )
        unread_count = event.unread_count
    else:
        unread_count = repository.count_unread(user_id)
    return MarkAllReadResult(updated=updated, unread_count=unread_count)


__all__ = ["mark_all_notifications_read", "mark_notification_read"]
