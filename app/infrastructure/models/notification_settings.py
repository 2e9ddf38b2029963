"""SQLAlchemy model for per-user notification preferences."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer
from sqlalchemy.sql import expression

from app.domain.entities.notification_settings import (
    DEFAULT_DND_END_HOUR,
    DEFAULT_DND_START_HOUR,
)
from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


def _toggle_column(default: bool) -> Column:
    return Column(
        Boolean,
        nullable=False,
        default=default,
        server_default=expression.true() if default else expression.false(),
    )


class NotificationSettingsModel(Base):
    """One row of delivery preferences per user."""

    __tablename__ = "notification_settings"

    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), primary_key=True
    )
    thread_reply_enabled = _toggle_column(True)
    post_reply_enabled = _toggle_column(True)
    mention_enabled = _toggle_column(True)
    post_liked_enabled = _toggle_column(True)
    follow_enabled = _toggle_column(True)
    system_enabled = _toggle_column(True)
    dnd_enabled = _toggle_column(False)
    dnd_start_hour = Column(Integer, nullable=False, default=DEFAULT_DND_START_HOUR)
    dnd_end_hour = Column(Integer, nullable=False, default=DEFAULT_DND_END_HOUR)
    updated_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationSettingsModel"]
