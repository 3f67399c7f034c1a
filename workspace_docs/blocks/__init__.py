"""
Block content model.

Blocks are the content units of a page; toggle blocks nest children
by id.
"""

from .types import (
    CODE_LANGUAGES,
    NESTABLE_TYPES,
    Block,
    BlockType,
)
from .store import BlockStore
from .transition import (
    BLOCK_MENU,
    TRIGGER_CHARACTER,
    BlockKindOption,
    BlockTypeTransition,
    ContentEdit,
    ConvertBlock,
)

__all__ = [
    # Block types
    "Block",
    "BlockType",
    "NESTABLE_TYPES",
    "CODE_LANGUAGES",
    # Operations
    "BlockStore",
    "BlockTypeTransition",
    # Conversion
    "BLOCK_MENU",
    "TRIGGER_CHARACTER",
    "BlockKindOption",
    "ContentEdit",
    "ConvertBlock",
]
