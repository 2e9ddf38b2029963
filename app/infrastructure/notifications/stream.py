"""Per-connection push stream bridging the event bus to a client."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any, Literal

from app.domain.entities import NotificationEvent
from app.utils import now_in_app_timezone

from .bus import EventBus

logger = logging.getLogger(__name__)

DEFAULT_HEARTBEAT_SECONDS = 25.0

_CLOSE = object()


@dataclass(frozen=True)
class StreamFrame:
    """One unit pushed to a client: an event payload or an idle heartbeat."""

    kind: Literal["event", "heartbeat"]
    data: dict[str, Any] | None = None


class NotificationStream:
    """Cancellable, long-lived producer of frames for one connection.

    The stream must be created on the event loop that consumes
    :meth:`frames`. Bus handlers may run on other threads, so events are
    handed to the loop with ``call_soon_threadsafe``, which keeps them in
    publish order.
    """

    def __init__(
        self,
        bus: EventBus,
        user_id: int,
        *,
        heartbeat_interval: float = DEFAULT_HEARTBEAT_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if heartbeat_interval <= 0:
            raise ValueError("heartbeat_interval must be positive")
        self._bus = bus
        self._user_id = user_id
        self._heartbeat_interval = heartbeat_interval
        self._loop = loop or asyncio.get_running_loop()
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._unsubscribe = None
        self._closed = False

    @property
    def user_id(self) -> int:
        return self._user_id

    @property
    def closed(self) -> bool:
        return self._closed

    def open(self) -> None:
        """Subscribe to the bus. Events published from now on are buffered."""

        if self._closed or self._unsubscribe is not None:
            return
        self._unsubscribe = self._bus.subscribe(self._user_id, self._on_event)
        logger.info("Notification stream opened for user %s", self._user_id)

    def close(self) -> None:
        """Unsubscribe and terminate :meth:`frames`. Safe to call repeatedly."""

        if self._closed:
            return
        self._closed = True
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if not self._loop.is_closed():
            self._loop.call_soon_threadsafe(self._queue.put_nowait, _CLOSE)
        logger.info("Notification stream closed for user %s", self._user_id)

    async def frames(self, *, unread_count: int) -> AsyncIterator[StreamFrame]:
        """Yield the ``connected`` baseline, then bus events and heartbeats.

        The subscription is released when the iterator finishes, is closed, or
        the consuming task is cancelled.
        """

        self.open()
        try:
            yield StreamFrame("event", self._connected_payload(unread_count))
            while not self._closed:
                try:
                    item = await asyncio.wait_for(
                        self._queue.get(), timeout=self._heartbeat_interval
                    )
                except asyncio.TimeoutError:
                    yield StreamFrame("heartbeat")
                    continue
                if item is _CLOSE:
                    break
                yield StreamFrame("event", item.to_payload())
        finally:
            self.close()

    def _on_event(self, event: NotificationEvent) -> None:
        if self._closed:
            return
        self._loop.call_soon_threadsafe(self._queue.put_nowait, event)

    def _connected_payload(self, unread_count: int) -> dict[str, Any]:
        return {
            "type": "connected",
            "userId": self._user_id,
            "unreadCount": unread_count,
            "createdAt": now_in_app_timezone().isoformat(),
        }


def sse_preamble(retry_milliseconds: int) -> str:
    """Return the reconnect hint sent before the first EventSource frame."""

    return f"retry: {retry_milliseconds}\n\n"


def encode_sse_frame(frame: StreamFrame) -> str:
    """Serialize ``frame`` using the ``text/event-stream`` wire format."""

    if frame.kind == "heartbeat":
        return ": ping\n\n"
    return f"data: {json.dumps(frame.data, separators=(',', ':'))}\n\n"


def frame_to_message(frame: StreamFrame) -> dict[str, Any]:
    """Return the JSON message sent over a websocket for ``frame``."""

    if frame.kind == "heartbeat":
        return {"type": "heartbeat"}
    return dict(frame.data or {})


__all__ = [
    "DEFAULT_HEARTBEAT_SECONDS",
    "NotificationStream",
    "StreamFrame",
    "encode_sse_frame",
    "frame_to_message",
    "sse_preamble",
]
