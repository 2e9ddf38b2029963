"""FastAPI dependency utilities."""

import logging

from fastapi import Depends, HTTPException, Query, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.domain.entities import User
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.notifications import EventBus
from app.infrastructure.repositories import UserRepository
from app.infrastructure.security import decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token.

    Every credential path (header, query parameter, websocket) goes through
    this function so verification is identical regardless of transport.
    """

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        logger.warning("Rejected access token: %s", exc)
        raise _unauthorized() from exc

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _unauthorized() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user


def extract_bearer_token(authorization: str | None) -> str | None:
    """Return the token of an ``Authorization: Bearer`` header value."""

    if not authorization:
        return None
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() != "bearer" or not credentials.strip():
        return None
    return credentials.strip()


def extract_stream_token(authorization: str | None, query_token: str | None) -> str | None:
    """Return the stream credential, preferring the header over ``?token=``.

    EventSource clients cannot set headers, so the query parameter is an
    accepted alternate delivery path for the same token.
    """

    header_token = extract_bearer_token(authorization)
    if header_token:
        return header_token
    if query_token and query_token.strip():
        return query_token.strip()
    return None


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the ``Authorization`` header."""

    if credentials is None or not credentials.credentials:
        raise _unauthorized("Not authenticated")
    return resolve_current_user(credentials.credentials, db)


def authenticate_token(token: str) -> User:
    """Resolve ``token`` in a session that is closed before returning.

    Long-lived connections use this so no pooled database connection stays
    checked out while they are open.
    """

    session = SessionLocal()
    try:
        return resolve_current_user(token, session)
    finally:
        session.close()


def get_stream_user(
    request: Request,
    token: str | None = Query(default=None, min_length=1),
) -> User:
    """Authenticate a streaming request from its header or ``token`` query."""

    stream_token = extract_stream_token(request.headers.get("authorization"), token)
    if stream_token is None:
        raise _unauthorized("Not authenticated")
    return authenticate_token(stream_token)


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden",
        )
    return current_user


def get_event_bus(request: Request) -> EventBus:
    """Return the event bus owned by the running application."""

    return request.app.state.event_bus
