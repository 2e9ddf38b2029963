"""In-process publish/subscribe for notification events, keyed by user."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from app.domain.entities import NotificationEvent

logger = logging.getLogger(__name__)

EventHandler = Callable[[NotificationEvent], None]


class EventBus:
    """Route :class:`NotificationEvent` objects to the handlers of one user.

    Handlers are called synchronously by :meth:`publish`, in the order they
    subscribed. ``publish`` may be called from worker threads while
    subscriptions are managed from the event loop, so the registry is guarded
    by a lock and handlers run on a snapshot taken under it.
    """

    def __init__(self) -> None:
        self._handlers: dict[int, list[EventHandler]] = {}
        self._lock = threading.Lock()

    def subscribe(self, user_id: int, handler: EventHandler) -> Callable[[], None]:
        """Register ``handler`` for ``user_id`` and return its unsubscribe function."""

        with self._lock:
            self._handlers.setdefault(user_id, []).append(handler)

        unsubscribed = False

        def unsubscribe() -> None:
            nonlocal unsubscribed
            if unsubscribed:
                return
            unsubscribed = True
            self._remove(user_id, handler)

        return unsubscribe

    def publish(self, user_id: int, event: NotificationEvent) -> int:
        """Deliver ``event`` to every handler of ``user_id``.

        Returns the number of handlers that accepted the event. A failing
        handler is logged and skipped.
        """

        with self._lock:
            handlers = list(self._handlers.get(user_id, ()))

        delivered = 0
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(
                    "Notification handler failed for user %s on %s", user_id, event.type
                )
                continue
            delivered += 1
        return delivered

    def subscriber_count(self, user_id: int) -> int:
        """Return how many live subscriptions exist for ``user_id``."""

        with self._lock:
            return len(self._handlers.get(user_id, ()))

    def _remove(self, user_id: int, handler: EventHandler) -> None:
        with self._lock:
            handlers = self._handlers.get(user_id)
            if handlers is None:
                return
            try:
                handlers.remove(handler)
            except ValueError:
                return
            if not handlers:
                self._handlers.pop(user_id, None)


__all__ = ["EventBus", "EventHandler"]
