"""
Identity types and data classes.

Defines the user identity that every command is executed as.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class UserRole(Enum):
    """Privilege tiers. Admins bypass every page access check."""

    ADMIN = "admin"
    MEMBER = "member"

    @classmethod
    def parse(cls, value: "str | UserRole") -> "UserRole":
        """Parse a role, accepting "user" as an alias for member."""
        if isinstance(value, UserRole):
            return value
        if value == "user":
            return cls.MEMBER
        return cls(value)


@dataclass
class UserIdentity:
    """Identity of an actor issuing commands.

    This is the single source of truth for "who is acting?".
    Page creation stamps creator_id from it and every access
    decision is evaluated against it.
    """

    user_id: str
    display_name: str
    role: UserRole = UserRole.MEMBER
    avatar: str = ""

    def __post_init__(self) -> None:
        self.role = UserRole.parse(self.role)
        if not self.avatar and self.display_name:
            self.avatar = self.display_name[0].upper()

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "user_id": self.user_id,
            "display_name": self.display_name,
            "role": self.role.value,
            "avatar": self.avatar,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserIdentity":
        """Deserialize from dictionary."""
        return cls(
            user_id=data["user_id"],
            display_name=data["display_name"],
            role=UserRole.parse(data.get("role", "member")),
            avatar=data.get("avatar", ""),
        )
