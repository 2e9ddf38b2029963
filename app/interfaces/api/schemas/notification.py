"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema exposing camelCase field names on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class NotificationActorRead(CamelModel):
    id: int
    username: str
    avatar: str | None = None


class NotificationRead(CamelModel):
    """Representation of a notification delivered to the client."""

    id: int
    user_id: int
    actor_user_id: int | None = None
    type: str
    title: str
    content: str | None = None
    related_type: str | None = None
    related_id: int | None = None
    is_read: bool
    read_at: datetime | None = None
    created_at: datetime
    actor: NotificationActorRead | None = None


class NotificationPageRead(CamelModel):
    items: list[NotificationRead]
    page: int
    page_size: int
    total: int
    total_pages: int


class UnreadCountRead(CamelModel):
    unread_count: int


class MarkAllReadRead(CamelModel):
    updated: int
    unread_count: int


class NotificationSettingsRead(CamelModel):
    user_id: int
    thread_reply_enabled: bool
    post_reply_enabled: bool
    mention_enabled: bool
    post_liked_enabled: bool
    follow_enabled: bool
    system_enabled: bool
    dnd_enabled: bool
    dnd_start_hour: int
    dnd_end_hour: int
    updated_at: datetime | None = None


class NotificationSettingsUpdate(CamelModel):
    """Partial update of notification settings.

    Unknown fields and non-boolean or non-integer values are rejected instead
    of being coerced.
    """

    model_config = ConfigDict(extra="forbid")

    thread_reply_enabled: StrictBool | None = None
    post_reply_enabled: StrictBool | None = None
    mention_enabled: StrictBool | None = None
    post_liked_enabled: StrictBool | None = None
    follow_enabled: StrictBool | None = None
    system_enabled: StrictBool | None = None
    dnd_enabled: StrictBool | None = None
    dnd_start_hour: StrictInt | None = Field(default=None, ge=0, le=23)
    dnd_end_hour: StrictInt | None = Field(default=None, ge=0, le=23)


class SystemNotificationCreate(CamelModel):
    user_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=255)
    content: str | None = Field(default=None, max_length=10_000)


class SystemNotificationCreated(CamelModel):
    notification_id: int | None


__all__ = [
    "MarkAllReadRead",
    "NotificationActorRead",
    "NotificationPageRead",
    "NotificationRead",
    "NotificationSettingsRead",
    "NotificationSettingsUpdate",
    "SystemNotificationCreate",
    "SystemNotificationCreated",
    "UnreadCountRead",
]
