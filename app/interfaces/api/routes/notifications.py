"""Endpoints and push streams for user notifications."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator
from typing import NoReturn

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Request,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from app.application.use_cases.notifications import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    create_system_notification,
    get_notification_settings,
    get_unread_count,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    update_notification_settings,
)
from app.config import get_settings
from app.domain.entities import Notification, User
from app.domain.exceptions import (
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
    NotificationError,
    UnauthorizedError,
)
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.notifications import (
    EventBus,
    NotificationStream,
    encode_sse_frame,
    frame_to_message,
    sse_preamble,
)
from app.interfaces.api.dependencies import (
    authenticate_token,
    extract_stream_token,
    get_current_user,
    get_event_bus,
    get_stream_user,
    require_admin,
)
from app.interfaces.api.schemas import (
    MarkAllReadRead,
    NotificationPageRead,
    NotificationRead,
    NotificationSettingsRead,
    NotificationSettingsUpdate,
    SystemNotificationCreate,
    SystemNotificationCreated,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

_ERROR_STATUS: dict[type[NotificationError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
}

_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}

_WS_POLICY_VIOLATION = 1008


def _raise_http_error(exc: NotificationError) -> NoReturn:
    status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
    raise HTTPException(status_code=status_code, detail=str(exc)) from exc


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("", response_model=NotificationPageRead)
def list_user_notifications(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, alias="pageSize"),
    unread_only: bool = Query(False, alias="unreadOnly"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationPageRead:
    """Return the authenticated user's notifications, newest first."""

    try:
        result = list_notifications(
            db,
            current_user.id,
            page=page,
            page_size=page_size,
            unread_only=unread_only,
        )
    except NotificationError as exc:
        _raise_http_error(exc)
    return NotificationPageRead(
        items=[_notification_to_schema(item) for item in result.items],
        page=result.page,
        page_size=result.page_size,
        total=result.total,
        total_pages=result.total_pages,
    )


@router.get("/unread-count", response_model=UnreadCountRead)
def read_unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UnreadCountRead:
    """Return how many notifications the user has not read yet."""

    try:
        unread_count = get_unread_count(db, current_user.id)
    except NotificationError as exc:
        _raise_http_error(exc)
    return UnreadCountRead(unread_count=unread_count)


@router.get("/settings", response_model=NotificationSettingsRead)
def read_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationSettingsRead:
    """Return the delivery preferences, creating defaults on first access."""

    try:
        settings = get_notification_settings(db, current_user.id)
    except NotificationError as exc:
        _raise_http_error(exc)
    return NotificationSettingsRead.model_validate(settings)


@router.put("/settings", response_model=NotificationSettingsRead)
def update_settings(
    settings_in: NotificationSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> NotificationSettingsRead:
    """Apply a partial update to the delivery preferences."""

    patch = settings_in.model_dump(exclude_unset=True)
    try:
        settings = update_notification_settings(db, current_user.id, patch)
    except NotificationError as exc:
        _raise_http_error(exc)
    return NotificationSettingsRead.model_validate(settings)


@router.post("/read-all", response_model=MarkAllReadRead)
def mark_all_read(
    db: Session = Depends(get_db),
    bus: EventBus = Depends(get_event_bus),
    current_user: User = Depends(get_current_user),
) -> MarkAllReadRead:
    """Mark every unread notification of the user as read."""

    try:
        result = mark_all_notifications_read(db, bus, user_id=current_user.id)
    except NotificationError as exc:
        _raise_http_error(exc)
    return MarkAllReadRead(updated=result.updated, unread_count=result.unread_count)


@router.post(
    "/system",
    response_model=SystemNotificationCreated,
    status_code=status.HTTP_201_CREATED,
)
def create_system(
    payload: SystemNotificationCreate,
    db: Session = Depends(get_db),
    bus: EventBus = Depends(get_event_bus),
    current_user: User = Depends(require_admin),
) -> SystemNotificationCreated:
    """Send a system notification to a user. Administrators only."""

    content = payload.content.strip() if payload.content is not None else None
    try:
        notification = create_system_notification(
            db,
            bus,
            user_id=payload.user_id,
            title=payload.title.strip(),
            content=content,
        )
    except NotificationError as exc:
        _raise_http_error(exc)

    if notification is None:
        logger.info(
            "System notification from admin %s to user %s was suppressed",
            current_user.id,
            payload.user_id,
        )
    return SystemNotificationCreated(
        notification_id=notification.id if notification else None
    )


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    bus: EventBus = Depends(get_event_bus),
    current_user: User = Depends(get_current_user),
) -> NotificationRead:
    """Mark one notification as read. Repeating the call is harmless."""

    try:
        notification = mark_notification_read(
            db, bus, user_id=current_user.id, notification_id=notification_id
        )
    except NotificationError as exc:
        _raise_http_error(exc)
    return _notification_to_schema(notification)


def _count_unread(user_id: int) -> int:
    session = SessionLocal()
    try:
        return get_unread_count(session, user_id)
    finally:
        session.close()


class NotificationStreamResponse(StreamingResponse):
    """Event stream response that closes ``stream`` however the response ends.

    The body iterator is not closed when a send fails and never starts when
    the client is gone before the headers.
    """

    def __init__(self, stream: NotificationStream, content: AsyncIterator[str], **kwargs) -> None:
        super().__init__(content, **kwargs)
        self.stream = stream

    async def __call__(self, scope, receive, send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            self.stream.close()


async def _event_stream_body(
    request: Request,
    stream: NotificationStream,
    *,
    retry_milliseconds: int,
) -> AsyncIterator[str]:
    # Subscribe before counting so no event falls between baseline and stream.
    stream.open()
    frames = None
    try:
        unread_count = await run_in_threadpool(_count_unread, stream.user_id)
        frames = stream.frames(unread_count=unread_count)
        yield sse_preamble(retry_milliseconds)
        async for frame in frames:
            if frame.kind == "heartbeat" and await request.is_disconnected():
                break
            yield encode_sse_frame(frame)
    finally:
        stream.close()
        if frames is not None:
            await frames.aclose()


@router.get("/stream")
async def notification_event_stream(
    request: Request,
    bus: EventBus = Depends(get_event_bus),
    current_user: User = Depends(get_stream_user),
) -> StreamingResponse:
    """Push notification events to the client as Server-Sent Events.

    The token may come from the ``Authorization`` header or, for EventSource
    clients, the ``token`` query parameter. The first frame is ``connected``
    with the current unread count. The subscription is released when the
    client disconnects; reconnecting clients start a fresh stream.
    """

    settings = get_settings()
    stream = NotificationStream(
        bus, current_user.id, heartbeat_interval=settings.stream_heartbeat_seconds
    )
    return NotificationStreamResponse(
        stream,
        _event_stream_body(
            request,
            stream,
            retry_milliseconds=settings.stream_retry_milliseconds,
        ),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )


async def _receive_until_disconnect(websocket: WebSocket, stream: NotificationStream) -> None:
    try:
        while True:
            text = await websocket.receive_text()
            try:
                message = json.loads(text)
            except ValueError:
                continue
            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        pass
    finally:
        stream.close()


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint carrying the same frames as the event stream."""

    token = extract_stream_token(
        websocket.headers.get("authorization"), websocket.query_params.get("token")
    )
    if not token:
        await websocket.close(code=_WS_POLICY_VIOLATION)
        return

    try:
        user = await run_in_threadpool(authenticate_token, token)
    except HTTPException:
        await websocket.close(code=_WS_POLICY_VIOLATION)
        return

    await websocket.accept()
    settings = get_settings()
    stream = NotificationStream(
        websocket.app.state.event_bus,
        user.id,
        heartbeat_interval=settings.stream_heartbeat_seconds,
    )
    stream.open()
    receiver = asyncio.create_task(_receive_until_disconnect(websocket, stream))
    frames = None
    try:
        unread_count = await run_in_threadpool(_count_unread, user.id)
        frames = stream.frames(unread_count=unread_count)
        async for frame in frames:
            await websocket.send_json(frame_to_message(frame))
    except (WebSocketDisconnect, OSError) as exc:
        logger.debug("Notification websocket for user %s dropped: %r", user.id, exc)
    finally:
        stream.close()
        receiver.cancel()
        await asyncio.gather(receiver, return_exceptions=True)
        if frames is not None:
            await frames.aclose()
