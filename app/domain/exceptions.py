"""Errors raised by the notification use cases."""


class NotificationError(ValueError):
    """Base class for failures surfaced to the caller."""


class NotFoundError(NotificationError):
    """The user or notification does not exist or is not owned by the caller."""


class ForbiddenError(NotificationError):
    """The caller lacks the role required for the operation."""


class InvalidArgumentError(NotificationError):
    """The request carries an unknown field or a malformed value."""


class UnauthorizedError(NotificationError):
    """The credential is missing or cannot be verified."""


__all__ = [
    "ForbiddenError",
    "InvalidArgumentError",
    "NotFoundError",
    "NotificationError",
    "UnauthorizedError",
]
