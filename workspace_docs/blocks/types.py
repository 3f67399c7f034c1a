"""
Block types and schemas.

A block is the atomic content unit of a page. All variants share one
dataclass; type-specific fields stay None until the block becomes
that type.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any


class BlockType(str, Enum):
    """Supported block variants."""

    TEXT = "text"
    HEADING = "heading"
    TODO = "todo"
    IMAGE = "image"
    TOGGLE = "toggle"
    DIVIDER = "divider"
    CODE = "code"
    FILE = "file"


# Block types that own nested children
NESTABLE_TYPES = frozenset({BlockType.TOGGLE})

# Languages offered by code blocks
CODE_LANGUAGES: tuple[str, ...] = (
    "javascript",
    "python",
    "typescript",
    "html",
    "css",
    "json",
    "plaintext",
)

# Fields that define where a block lives; never changed by a plain update
STRUCTURAL_FIELDS = frozenset({"id", "page_id", "parent_block_id", "children"})


@dataclass
class Block:
    """A content block.

    Hierarchy is expressed by back-reference (parent_block_id) plus the
    toggle's ordered children id list; blocks never hold each other.
    """

    id: str
    page_id: str
    type: BlockType = BlockType.TEXT
    content: str = ""
    parent_block_id: str | None = None

    # todo
    checked: bool | None = None
    # image
    src: str | None = None
    # code
    language: str | None = None
    # toggle
    is_expanded: bool | None = None
    children: list[str] | None = None
    # file
    file_name: str | None = None
    file_url: str | None = None
    file_size: int | None = None
    file_type: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.type, str):
            self.type = BlockType(self.type)

    def is_nestable(self) -> bool:
        """Check if this block type owns children."""
        return self.type in NESTABLE_TYPES

    def has_children(self) -> bool:
        return bool(self.children)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary. Unset type-specific fields are omitted."""
        result: dict[str, Any] = {
            "id": self.id,
            "page_id": self.page_id,
            "type": self.type.value,
            "content": self.content,
        }
        for f in fields(self):
            if f.name in result:
                continue
            value = getattr(self, f.name)
            if value is not None:
                result[f.name] = list(value) if isinstance(value, list) else value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Block:
        """Deserialize from dictionary."""
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in data.items() if key in known}
        if kwargs.get("children") is not None:
            kwargs["children"] = list(kwargs["children"])
        return cls(**kwargs)


UPDATABLE_FIELDS = frozenset(f.name for f in fields(Block)) - STRUCTURAL_FIELDS
