"""Validation helpers for notification settings updates."""

from collections.abc import Mapping
from typing import Any

from app.domain.entities.notification_settings import (
    BOOLEAN_FIELDS,
    HOUR_FIELDS,
    UPDATABLE_FIELDS,
)
from app.domain.exceptions import InvalidArgumentError


def ensure_valid_settings_patch(patch: Mapping[str, Any]) -> dict[str, Any]:
    """Return ``patch`` as a dict or raise :class:`InvalidArgumentError`.

    Only recognized fields are accepted; toggles must be real booleans and
    hours integers between 0 and 23. Values are never coerced.
    """

    unknown = sorted(set(patch) - UPDATABLE_FIELDS)
    if unknown:
        raise InvalidArgumentError(f"Unknown fields: {', '.join(unknown)}")

    for name, value in patch.items():
        if name in BOOLEAN_FIELDS and not isinstance(value, bool):
            raise InvalidArgumentError(f"{name} must be a boolean")
        if name in HOUR_FIELDS:
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidArgumentError(f"{name} must be an integer")
            if not 0 <= value <= 23:
                raise InvalidArgumentError(f"{name} must be between 0 and 23")
    return dict(patch)
