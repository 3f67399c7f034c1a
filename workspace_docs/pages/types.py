"""
Page, workspace and template data types.

Pages form a forest through parent_id back-references; nothing holds
a reference to its children, so the tree is derived by scanning the
store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

DEFAULT_PAGE_TITLE = "Untitled"
DEFAULT_PAGE_ICON = "📄"


@dataclass
class Page:
    """A titled node in the workspace hierarchy.

    Attributes:
        id: Unique page identifier
        title: Display title
        parent_id: Parent page, or None for a root page
        creator_id: User who created the page; always on the access list
        access: User ids allowed to edit the page, in grant order
        created_at: Creation time (UTC)
        is_expanded: Navigation-only flag, not content
        icon: Emoji or short string shown next to the title
    """

    id: str
    title: str
    creator_id: str
    parent_id: str | None = None
    access: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    is_expanded: bool = False
    icon: str = DEFAULT_PAGE_ICON

    def __post_init__(self) -> None:
        if self.creator_id not in self.access:
            self.access.insert(0, self.creator_id)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "id": self.id,
            "title": self.title,
            "parent_id": self.parent_id,
            "creator_id": self.creator_id,
            "access": list(self.access),
            "created_at": self.created_at.isoformat(),
            "is_expanded": self.is_expanded,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Page:
        """Deserialize from dictionary."""
        created_raw = data.get("created_at")
        if isinstance(created_raw, str):
            created_at = datetime.fromisoformat(created_raw)
        elif isinstance(created_raw, datetime):
            created_at = created_raw
        else:
            created_at = datetime.now(UTC)

        return cls(
            id=data["id"],
            title=data.get("title", DEFAULT_PAGE_TITLE),
            creator_id=data["creator_id"],
            parent_id=data.get("parent_id"),
            access=list(data.get("access", [])),
            created_at=created_at,
            is_expanded=bool(data.get("is_expanded", False)),
            icon=data.get("icon", DEFAULT_PAGE_ICON),
        )


@dataclass
class Workspace:
    """The single top-level container for all pages."""

    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Workspace:
        return cls(id=data["id"], name=data["name"])


class TemplateKind(Enum):
    """Template families. Their contents live outside the page model."""

    ROADMAP = "roadmap"
    CALENDAR = "calendar"


@dataclass(frozen=True)
class Template:
    """A selectable template entry shown next to the page tree."""

    id: str
    name: str
    icon: str
    description: str
    kind: TemplateKind

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "icon": self.icon,
            "description": self.description,
            "kind": self.kind.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Template:
        return cls(
            id=data["id"],
            name=data["name"],
            icon=data.get("icon", ""),
            description=data.get("description", ""),
            kind=TemplateKind(data["kind"]),
        )


DEFAULT_TEMPLATES: tuple[Template, ...] = (
    Template(
        id="template-roadmap",
        name="Roadmap",
        icon="🗺️",
        description="Plan and track project milestones",
        kind=TemplateKind.ROADMAP,
    ),
    Template(
        id="template-calendar",
        name="Calendar",
        icon="📅",
        description="Organize events and deadlines",
        kind=TemplateKind.CALENDAR,
    ),
)
