"""Block type conversion driven by the slash menu.

When an edit leaves a block's text ending in the trigger character the
input layer offers BLOCK_MENU; picking an entry emits a ConvertBlock
intent. Conversion re-checks edit rights when it is committed instead
of trusting the edit that opened the menu.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..identity.types import UserIdentity
from ..results import CommandResult
from .store import BlockStore
from .types import Block, BlockType

logger = logging.getLogger(__name__)

TRIGGER_CHARACTER = "/"

# Kinds whose content is discarded on conversion
CONTENTLESS_TYPES = frozenset({BlockType.DIVIDER, BlockType.FILE})


@dataclass(frozen=True)
class BlockKindOption:
    """One entry of the block type menu."""

    type: BlockType
    label: str
    icon: str
    description: str


BLOCK_MENU: tuple[BlockKindOption, ...] = (
    BlockKindOption(BlockType.TEXT, "Text", "📝", "Simple text block"),
    BlockKindOption(BlockType.HEADING, "Heading", "📋", "Large heading text"),
    BlockKindOption(BlockType.TODO, "To-do", "☑️", "Checkbox with text"),
    BlockKindOption(BlockType.IMAGE, "Image", "🖼️", "Upload and display image"),
    BlockKindOption(BlockType.FILE, "File", "📎", "Upload a file"),
    BlockKindOption(BlockType.TOGGLE, "Toggle", "▶️", "Collapsible content block"),
    BlockKindOption(BlockType.DIVIDER, "Divider", "➖", "Horizontal divider line"),
    BlockKindOption(BlockType.CODE, "Code", "💻", "Code block with syntax"),
)


@dataclass(frozen=True)
class ConvertBlock:
    """Intent to change a block's type, emitted by the input layer."""

    block_id: str
    target_type: BlockType | str


@dataclass(frozen=True)
class ContentEdit:
    """Outcome of a content edit plus whether the type menu should open."""

    result: CommandResult[Block]
    menu_open: bool = False


def ends_with_trigger(content: str, trigger: str = TRIGGER_CHARACTER) -> bool:
    return content.endswith(trigger)


def strip_trigger(content: str, trigger: str = TRIGGER_CHARACTER) -> str:
    """Remove exactly one trailing trigger character, if present."""
    if content.endswith(trigger):
        return content[: -len(trigger)]
    return content


class BlockTypeTransition:
    """Applies slash-menu conversions to blocks of a BlockStore."""

    def __init__(self, blocks: BlockStore):
        self.blocks = blocks
        self.trigger = blocks.config.trigger_character
        self.default_code_language = blocks.config.default_code_language

    def menu(self) -> tuple[BlockKindOption, ...]:
        return BLOCK_MENU

    def edit_content(
        self, actor: UserIdentity | None, block_id: str, content: str
    ) -> ContentEdit:
        """Apply a content edit and report whether to offer the type menu."""
        result = self.blocks.update_block(actor, block_id, {"content": content})
        return ContentEdit(result=result, menu_open=result.ok and ends_with_trigger(content, self.trigger))

    def convert(self, actor: UserIdentity | None, command: ConvertBlock) -> CommandResult[Block]:
        """Convert a block to the chosen kind.

        The type is replaced; divider and file blocks lose their content,
        every other kind keeps it minus one trailing trigger character.
        Kind-specific fields start fresh: todo is unchecked, toggle is
        collapsed with no children, code uses the default language. A
        block that is already a toggle keeps its children.

        An unknown kind is INVALID. A toggle that still has children
        cannot become another kind (checked by update_block after the
        access gate).
        """
        block = self.blocks.get_block(command.block_id)
        if block is None:
            return CommandResult.not_found("block", command.block_id)

        try:
            target = BlockType(command.target_type)
        except ValueError:
            return CommandResult.invalid(
                "target_type", "unknown block type", str(command.target_type)
            )

        updates: dict[str, Any] = {"type": target}
        if target in CONTENTLESS_TYPES:
            updates["content"] = ""
        else:
            updates["content"] = strip_trigger(block.content, self.trigger)

        if target is BlockType.TODO:
            updates["checked"] = False
        elif target is BlockType.TOGGLE:
            updates["is_expanded"] = False
        elif target is BlockType.CODE:
            updates["language"] = self.default_code_language

        result = self.blocks.update_block(actor, command.block_id, updates)
        if result.ok:
            logger.debug(f"Block {block.id} converted to {target.value}")
        return result

    def dismiss(self, actor: UserIdentity | None, block_id: str) -> CommandResult[Block]:
        """Close the menu without choosing: drop the trailing trigger."""
        block = self.blocks.get_block(block_id)
        if block is None:
            return CommandResult.not_found("block", block_id)
        return self.blocks.update_block(
            actor, block_id, {"content": strip_trigger(block.content, self.trigger)}
        )
