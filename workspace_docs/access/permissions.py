"""Permission types for access control."""

from dataclasses import dataclass
from enum import Enum


class Permission(Enum):
    """Permission levels within a workspace."""

    EDIT = "edit"  # mutate a page and its blocks
    ADMIN = "admin"  # workspace-level actions and every page


@dataclass
class AccessDecision:
    """Result of an access control check."""

    allowed: bool
    reason: str
    permission_level: Permission | None = None

    def __bool__(self) -> bool:
        return self.allowed
