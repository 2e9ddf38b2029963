"""Domain entity representing a forum user."""

from dataclasses import dataclass
from datetime import datetime

ADMIN_ROLE = "admin"


@dataclass
class User:
    """Directory attributes of a forum user."""

    id: int | None
    username: str
    role: str = "user"
    avatar: str | None = None
    created_at: datetime | None = None

    def has_role(self, alias: str) -> bool:
        """Return ``True`` when the user's role matches ``alias``."""

        return self.role.lower() == alias.lower()

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.has_role(ADMIN_ROLE)


__all__ = ["ADMIN_ROLE", "User"]
