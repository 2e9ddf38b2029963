"""Notification producers called by the forum's content operations.

Each helper resolves the recipients of one forum action, builds the
user-facing title and preview, and hands the candidates to
:func:`create_notification`. Recipients suppressed by their own settings are
silently skipped.
"""

from __future__ import annotations

import re

from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationCandidate, NotificationType
from app.infrastructure.notifications import EventBus
from app.infrastructure.repositories import UserRepository

from .create_notification import create_notification

PREVIEW_LENGTH = 140
_MENTION_PATTERN = re.compile(r"@([\w-]{2,50})")


def build_preview(content: str, max_length: int = PREVIEW_LENGTH) -> str:
    """Return ``content`` trimmed for display in a notification."""

    value = content.strip()
    if len(value) <= max_length:
        return value
    return f"{value[:max_length]}..."


def extract_mentions(content: str) -> list[str]:
    """Return the distinct ``@username`` handles in ``content`` in order."""

    return list(dict.fromkeys(_MENTION_PATTERN.findall(content)))


def _actor_name(session: Session, user_id: int) -> str:
    actor = UserRepository(session).get(user_id)
    return actor.username if actor else f"User#{user_id}"


def notify_post_created(
    session: Session,
    bus: EventBus,
    *,
    thread_id: int,
    thread_owner_id: int,
    post_author_id: int,
    content: str,
    parent_post_author_id: int | None = None,
) -> int:
    """Notify the thread owner, the replied-to author and mentioned users.

    A user receives at most one notification per post, in that priority
    order. Returns the number of notifications created.
    """

    actor_name = _actor_name(session, post_author_id)
    preview = build_preview(content)
    notified: set[int] = set()

    def _notify(recipient_id: int, notification_type: NotificationType, title: str) -> None:
        if recipient_id == post_author_id or recipient_id in notified:
            return
        created = create_notification(
            session,
            bus,
            NotificationCandidate(
                user_id=recipient_id,
                actor_user_id=post_author_id,
                type=notification_type.value,
                title=title,
                content=preview,
                related_type="thread",
                related_id=thread_id,
            ),
        )
        if created is not None:
            notified.add(recipient_id)

    _notify(
        thread_owner_id,
        NotificationType.THREAD_REPLY,
        f"{actor_name} replied to your thread",
    )
    if parent_post_author_id is not None:
        _notify(
            parent_post_author_id,
            NotificationType.POST_REPLY,
            f"{actor_name} replied to your post",
        )

    mentions = extract_mentions(content)
    for user in UserRepository(session).list_by_usernames(mentions):
        _notify(user.id, NotificationType.MENTION, f"{actor_name} mentioned you")

    return len(notified)


def notify_post_liked(
    session: Session,
    bus: EventBus,
    *,
    thread_id: int,
    post_author_id: int,
    post_content: str,
    actor_user_id: int,
) -> Notification | None:
    """Tell the author of a post that ``actor_user_id`` liked it."""

    actor_name = _actor_name(session, actor_user_id)
    return create_notification(
        session,
        bus,
        NotificationCandidate(
            user_id=post_author_id,
            actor_user_id=actor_user_id,
            type=NotificationType.POST_LIKED.value,
            title=f"{actor_name} liked your post",
            content=build_preview(post_content),
            related_type="thread",
            related_id=thread_id,
        ),
    )


def notify_user_followed(
    session: Session,
    bus: EventBus,
    *,
    follower_id: int,
    followed_id: int,
) -> Notification | None:
    """Tell ``followed_id`` that ``follower_id`` started following them."""

    actor_name = _actor_name(session, follower_id)
    return create_notification(
        session,
        bus,
        NotificationCandidate(
            user_id=followed_id,
            actor_user_id=follower_id,
            type=NotificationType.FOLLOW.value,
            title=f"{actor_name} followed you",
            related_type="user",
            related_id=follower_id,
        ),
    )


def create_system_notification(
    session: Session,
    bus: EventBus,
    *,
    user_id: int,
    title: str,
    content: str | None = None,
) -> Notification | None:
    """Create an actor-less ``system`` notification.

    Quiet hours do not apply, but the recipient's ``system`` toggle does.
    """

    return create_notification(
        session,
        bus,
        NotificationCandidate(
            user_id=user_id,
            actor_user_id=None,
            type=NotificationType.SYSTEM.value,
            title=title,
            content=content,
        ),
    )


__all__ = [
    "PREVIEW_LENGTH",
    "build_preview",
    "create_system_notification",
    "extract_mentions",
    "notify_post_created",
    "notify_post_liked",
    "notify_user_followed",
]
