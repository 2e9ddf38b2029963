import asyncio
import json
import threading
from contextlib import suppress
from datetime import datetime, timezone

import pytest

from app.domain.entities import NotificationEvent
from app.infrastructure.notifications import (
    EventBus,
    NotificationStream,
    StreamFrame,
    encode_sse_frame,
    frame_to_message,
    sse_preamble,
)


def _event(user_id: int, unread_count: int, notification_id: int | None = None) -> NotificationEvent:
    return NotificationEvent(
        type="notification_created" if notification_id else "notification_read_all",
        user_id=user_id,
        unread_count=unread_count,
        created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
        notification_id=notification_id,
    )


def test_stream_yields_baseline_then_events_in_publish_order():
    async def scenario():
        bus = EventBus()
        stream = NotificationStream(bus, 7, heartbeat_interval=5)
        frames = stream.frames(unread_count=3)

        connected = await frames.__anext__()
        assert bus.subscriber_count(7) == 1

        bus.publish(7, _event(7, 4, notification_id=11))
        bus.publish(7, _event(7, 0))
        first = await asyncio.wait_for(frames.__anext__(), 1)
        second = await asyncio.wait_for(frames.__anext__(), 1)

        stream.close()
        with pytest.raises(StopAsyncIteration):
            await asyncio.wait_for(frames.__anext__(), 1)
        return bus, connected, first, second

    bus, connected, first, second = asyncio.run(scenario())

    assert connected.kind == "event"
    assert connected.data["type"] == "connected"
    assert connected.data["userId"] == 7
    assert connected.data["unreadCount"] == 3
    assert first.data == {
        "type": "notification_created",
        "userId": 7,
        "unreadCount": 4,
        "createdAt": "2026-01-01T00:00:00+00:00",
        "notificationId": 11,
    }
    assert second.data["type"] == "notification_read_all"
    assert "notificationId" not in second.data
    assert bus.subscriber_count(7) == 0


def test_events_published_from_worker_threads_keep_their_order():
    async def scenario():
        bus = EventBus()
        stream = NotificationStream(bus, 3, heartbeat_interval=5)
        frames = stream.frames(unread_count=0)
        await frames.__anext__()

        def publish_all() -> None:
            for count in range(1, 6):
                bus.publish(3, _event(3, count, notification_id=count))

        worker = threading.Thread(target=publish_all)
        worker.start()
        worker.join()

        counts = []
        for _ in range(5):
            frame = await asyncio.wait_for(frames.__anext__(), 1)
            counts.append(frame.data["unreadCount"])
        await frames.aclose()
        return bus, counts

    bus, counts = asyncio.run(scenario())

    assert counts == [1, 2, 3, 4, 5]
    assert bus.subscriber_count(3) == 0


def test_idle_stream_emits_heartbeats():
    async def scenario():
        bus = EventBus()
        stream = NotificationStream(bus, 1, heartbeat_interval=0.01)
        frames = stream.frames(unread_count=0)
        await frames.__anext__()
        frame = await asyncio.wait_for(frames.__anext__(), 1)
        await frames.aclose()
        return frame

    frame = asyncio.run(scenario())

    assert frame.kind == "heartbeat"
    assert frame.data is None


def test_cancelling_the_consumer_releases_the_subscription():
    async def scenario():
        bus = EventBus()
        stream = NotificationStream(bus, 5, heartbeat_interval=5)

        async def consume() -> None:
            async for _ in stream.frames(unread_count=0):
                pass

        task = asyncio.create_task(consume())
        await asyncio.sleep(0.01)
        subscribed = bus.subscriber_count(5)
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
        return bus, stream, subscribed

    bus, stream, subscribed = asyncio.run(scenario())

    assert subscribed == 1
    assert stream.closed is True
    assert bus.subscriber_count(5) == 0


def test_close_before_iteration_never_subscribes():
    async def scenario():
        bus = EventBus()
        stream = NotificationStream(bus, 2)
        stream.close()
        stream.close()
        stream.open()
        return bus

    bus = asyncio.run(scenario())

    assert bus.subscriber_count(2) == 0


def test_heartbeat_interval_must_be_positive():
    async def scenario():
        NotificationStream(EventBus(), 1, heartbeat_interval=0)

    with pytest.raises(ValueError):
        asyncio.run(scenario())


def test_sse_encoding():
    event_frame = StreamFrame("event", {"type": "connected", "unreadCount": 2})

    assert sse_preamble(10_000) == "retry: 10000\n\n"
    assert encode_sse_frame(StreamFrame("heartbeat")) == ": ping\n\n"

    encoded = encode_sse_frame(event_frame)
    assert encoded.startswith("data: ")
    assert encoded.endswith("\n\n")
    assert json.loads(encoded[len("data: "):]) == {"type": "connected", "unreadCount": 2}


def test_websocket_messages():
    assert frame_to_message(StreamFrame("heartbeat")) == {"type": "heartbeat"}
    assert frame_to_message(StreamFrame("event", {"type": "connected"})) == {"type": "connected"}
