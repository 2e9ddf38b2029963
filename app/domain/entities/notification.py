"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Closed set of notification kinds a user can receive."""

    THREAD_REPLY = "thread_reply"
    POST_REPLY = "post_reply"
    MENTION = "mention"
    POST_LIKED = "post_liked"
    FOLLOW = "follow"
    SYSTEM = "system"


@dataclass
class NotificationActor:
    """Display information about the user who triggered a notification."""

    id: int
    username: str
    avatar: str | None = None


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: int | None
    user_id: int
    type: str
    title: str
    actor_user_id: int | None = None
    content: str | None = None
    related_type: str | None = None
    related_id: int | None = None
    is_read: bool = False
    read_at: datetime | None = None
    created_at: datetime | None = None
    actor: NotificationActor | None = None


@dataclass
class NotificationCandidate:
    """Notification proposed by a producer, not yet accepted or persisted."""

    user_id: int
    type: str
    title: str
    actor_user_id: int | None = None
    content: str | None = None
    related_type: str | None = None
    related_id: int | None = None


@dataclass
class NotificationPage:
    """One page of notifications plus the pagination summary."""

    items: list[Notification]
    page: int
    page_size: int
    total: int
    total_pages: int


@dataclass
class MarkAllReadResult:
    """Outcome of marking every unread notification of a user as read."""

    updated: int
    unread_count: int


__all__ = [
    "MarkAllReadResult",
    "Notification",
    "NotificationActor",
    "NotificationCandidate",
    "NotificationPage",
    "NotificationType",
]
