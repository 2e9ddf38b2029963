"""Use case for creating a notification through the delivery policy."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationCandidate
from app.infrastructure.notifications import EventBus
from app.infrastructure.repositories import (
    NotificationRepository,
    NotificationSettingsRepository,
)
from app.utils import ensure_app_timezone, now_in_app_timezone

from .common import ensure_user_exists, publish_notification_event
from .policy import evaluate_delivery

logger = logging.getLogger(__name__)


def create_notification(
    session: Session,
    bus: EventBus,
    candidate: NotificationCandidate,
    *,
    now: datetime | None = None,
) -> Notification | None:
    """Persist and publish ``candidate``.

    Returns ``None`` when the recipient's policy suppresses it; suppression is
    a normal outcome and nothing is stored. Raises ``NotFoundError`` when the
    recipient does not exist.
    """

    ensure_user_exists(session, candidate.user_id)
    settings = NotificationSettingsRepository(session).get_or_create(candidate.user_id)
    current_time = ensure_app_timezone(now) if now is not None else now_in_app_timezone()

    decision = evaluate_delivery(
        settings,
        notification_type=candidate.type,
        recipient_id=candidate.user_id,
        actor_user_id=candidate.actor_user_id,
        now=current_time,
    )
    if not decision.accepted:
        logger.debug(
            "Suppressed %s notification for user %s (%s)",
            candidate.type,
            candidate.user_id,
            decision.reason,
        )
        return None

    saved = NotificationRepository(session).create(
        Notification(
            id=None,
            user_id=candidate.user_id,
            actor_user_id=candidate.actor_user_id,
            type=candidate.type,
            title=candidate.title,
            content=candidate.content,
            related_type=candidate.related_type,
            related_id=candidate.related_id,
            created_at=current_time,
        )
    )
    publish_notification_event(
        session,
        bus,
        user_id=saved.user_id,
        event_type="notification_created",
        notification_id=saved.id,
    )
    return saved


__all__ = ["create_notification"]
