"""Realtime notification helpers for the infrastructure layer."""

from .bus import EventBus, EventHandler
from .stream import (
    DEFAULT_HEARTBEAT_SECONDS,
    NotificationStream,
    StreamFrame,
    encode_sse_frame,
    frame_to_message,
    sse_preamble,
)

__all__ = [
    "DEFAULT_HEARTBEAT_SECONDS",
    "EventBus",
    "EventHandler",
    "NotificationStream",
    "StreamFrame",
    "encode_sse_frame",
    "frame_to_message",
    "sse_preamble",
]
