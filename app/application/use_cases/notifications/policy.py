"""Delivery policy deciding whether a candidate notification is created."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

from app.domain.entities import NotificationSettings, NotificationType

SuppressionReason = Literal["self_notification", "type_disabled", "quiet_hours"]


@dataclass(frozen=True)
class DeliveryDecision:
    """Outcome of the policy gate for one candidate."""

    accepted: bool
    reason: SuppressionReason | None = None

    def __bool__(self) -> bool:
        return self.accepted


ACCEPT = DeliveryDecision(accepted=True)


def is_within_quiet_hours(start_hour: int, end_hour: int, hour: int) -> bool:
    """Return ``True`` when ``hour`` falls inside the ``start``-``end`` window.

    Equal bounds mute the whole day. A start after the end wraps past midnight.
    """

    if start_hour == end_hour:
        return True
    if start_hour < end_hour:
        return start_hour <= hour < end_hour
    return hour >= start_hour or hour < end_hour


def evaluate_delivery(
    settings: NotificationSettings,
    *,
    notification_type: str,
    recipient_id: int,
    actor_user_id: int | None,
    now: datetime,
) -> DeliveryDecision:
    """Decide whether a candidate should be persisted and pushed."""

    if actor_user_id is not None and actor_user_id == recipient_id:
        return DeliveryDecision(accepted=False, reason="self_notification")

    if not settings.is_type_enabled(notification_type):
        return DeliveryDecision(accepted=False, reason="type_disabled")

    if (
        settings.dnd_enabled
        and notification_type != NotificationType.SYSTEM.value
        and is_within_quiet_hours(settings.dnd_start_hour, settings.dnd_end_hour, now.hour)
    ):
        return DeliveryDecision(accepted=False, reason="quiet_hours")

    return ACCEPT


__all__ = [
    "ACCEPT",
    "DeliveryDecision",
    "SuppressionReason",
    "evaluate_delivery",
    "is_within_quiet_hours",
]
