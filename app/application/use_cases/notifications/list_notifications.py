"""Use cases for reading a user's notifications."""

from __future__ import annotations

import math

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPage
from app.infrastructure.repositories import NotificationRepository

from .common import ensure_user_exists

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def list_notifications(
    session: Session,
    user_id: int,
    *,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    unread_only: bool = False,
) -> NotificationPage:
    """Return one page of notifications, newest first."""

    ensure_user_exists(session, user_id)

    safe_page = max(1, page)
    safe_page_size = min(MAX_PAGE_SIZE, max(1, page_size))
    repository = NotificationRepository(session)
    total = repository.count_for_user(user_id, unread_only=unread_only)
    items = repository.list_for_user(
        user_id,
        offset=(safe_page - 1) * safe_page_size,
        limit=safe_page_size,
        unread_only=unread_only,
    )
    return NotificationPage(
        items=list(items),
        page=safe_page,
        page_size=safe_page_size,
        total=total,
        total_pages=max(1, math.ceil(total / safe_page_size)),
    )


def get_unread_count(session: Session, user_id: int) -> int:
    """Count the unread notifications of ``user_id`` from the stored rows."""

    ensure_user_exists(session, user_id)
    return NotificationRepository(session).count_unread(user_id)


__all__ = ["DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "get_unread_count", "list_notifications"]
