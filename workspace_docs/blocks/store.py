"""Block operations for page content.

Blocks of every page live in one global storage order. Page views show
root blocks (no parent_block_id) filtered from that order; toggle
blocks nest children by listing their ids. Every mutation is gated by
the access policy on the block's owning page.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ..access import AccessPolicy
from ..config import WorkspaceConfig
from ..id_utils import IdGenerator, TimestampIdGenerator
from ..identity.types import UserIdentity
from ..pages.types import Page
from ..results import CommandResult
from .types import (
    CODE_LANGUAGES,
    NESTABLE_TYPES,
    STRUCTURAL_FIELDS,
    UPDATABLE_FIELDS,
    Block,
    BlockType,
)

if TYPE_CHECKING:
    from ..store import WorkspaceStore

logger = logging.getLogger(__name__)


class BlockStore:
    """Commands and queries over the blocks of one store."""

    def __init__(
        self,
        store: WorkspaceStore,
        policy: AccessPolicy | None = None,
        id_generator: IdGenerator | None = None,
        config: WorkspaceConfig | None = None,
    ):
        self.store = store
        self.policy = policy or AccessPolicy()
        self.id_generator = id_generator or TimestampIdGenerator()
        self.config = config or WorkspaceConfig()
        if self.config.default_code_language not in CODE_LANGUAGES:
            raise ValueError(f"Unsupported code language: {self.config.default_code_language}")

    # =========================================================================
    # Queries
    # =========================================================================

    def get_block(self, block_id: str) -> Block | None:
        return self.store.get_block(block_id)

    def get_page_blocks(self, page_id: str) -> list[Block]:
        """Root-level blocks of a page, in storage order."""
        return self.store.blocks_where(
            lambda b: b.page_id == page_id and b.parent_block_id is None
        )

    def get_child_blocks(self, parent_block_id: str) -> list[Block]:
        """Blocks nested under a toggle, in storage order."""
        return self.store.blocks_where(lambda b: b.parent_block_id == parent_block_id)

    def can_edit_block(self, actor: UserIdentity | None, block_id: str) -> bool:
        block = self.store.get_block(block_id)
        if block is None:
            return False
        return self.policy.can_edit_page(actor, self.store, block.page_id)

    # =========================================================================
    # Commands
    # =========================================================================

    def add_block(
        self,
        actor: UserIdentity | None,
        page_id: str,
        after_block_id: str | None = None,
        parent_block_id: str | None = None,
    ) -> CommandResult[Block]:
        """Create an empty text block on a page.

        Args:
            actor: User issuing the command
            page_id: Owning page; a missing page fails the gate (DENIED)
            after_block_id: Splice the new block directly after this one in
                global storage order. An id that is not in storage puts the
                block at the very front.
            parent_block_id: Toggle block (same page) to nest the new block under

        Returns:
            CommandResult with the created block when applied
        """
        page = self.store.get_page(page_id)
        decision = self.policy.check_edit(actor, page)
        if not decision.allowed:
            user_id = actor.user_id if actor else None
            logger.debug(f"add_block denied for {user_id} on {page_id}: {decision.reason}")
            return CommandResult.denied(decision.reason, user_id, page_id)

        parent: Block | None = None
        if parent_block_id is not None:
            parent = self.store.get_block(parent_block_id)
            if parent is None:
                return CommandResult.not_found("block", parent_block_id)
            if not parent.is_nestable():
                return CommandResult.invalid("parent_block_id", "parent must be a toggle block", parent_block_id)
            if parent.page_id != page_id:
                return CommandResult.invalid("parent_block_id", "parent belongs to another page", parent_block_id)

        block = Block(
            id=self.store.unused_id(self.id_generator.new_id, "block"),
            page_id=page_id,
            parent_block_id=parent_block_id,
        )

        index = None
        if after_block_id is not None:
            index = self.store.block_position(after_block_id) + 1
        self.store.insert_block(block, index)

        if parent is not None:
            parent.children = [*(parent.children or []), block.id]

        logger.debug(f"Block {block.id} added to page {page_id}")
        return CommandResult.applied(block)

    def update_block(
        self, actor: UserIdentity | None, block_id: str, fields: dict[str, Any]
    ) -> CommandResult[Block]:
        """Shallow-merge fields into a block.

        Structural fields (id, page_id, parent_block_id, children) cannot
        be changed here; nesting is managed by add_block and delete_block.
        A toggle that still has nested blocks keeps its type, and a block
        that becomes a toggle starts with an empty children list.
        """
        block, failure = self._editable_block(actor, block_id)
        if failure is not None:
            return failure

        for name in fields:
            if name in STRUCTURAL_FIELDS:
                return CommandResult.invalid(name, "structural field cannot be updated")
            if name not in UPDATABLE_FIELDS:
                return CommandResult.invalid(name, "unknown block field")

        updates = dict(fields)
        if "type" in updates:
            try:
                updates["type"] = BlockType(updates["type"])
            except ValueError:
                return CommandResult.invalid("type", "unknown block type", str(updates["type"]))
            if block.has_children() and updates["type"] not in NESTABLE_TYPES:
                return CommandResult.invalid(
                    "type", "block still has nested blocks", updates["type"].value
                )

        for name, value in updates.items():
            setattr(block, name, value)
        if block.is_nestable() and block.children is None:
            block.children = []
        return CommandResult.applied(block)

    def set_checked(
        self, actor: UserIdentity | None, block_id: str, checked: bool
    ) -> CommandResult[Block]:
        return self.update_block(actor, block_id, {"checked": checked})

    def set_code_language(
        self, actor: UserIdentity | None, block_id: str, language: str
    ) -> CommandResult[Block]:
        if language not in CODE_LANGUAGES:
            return CommandResult.invalid("language", "unsupported language", language)
        return self.update_block(actor, block_id, {"language": language})

    def set_image_source(
        self, actor: UserIdentity | None, block_id: str, src: str
    ) -> CommandResult[Block]:
        """Record where an uploaded image can be read from (e.g. a data URL)."""
        return self.update_block(actor, block_id, {"src": src})

    def attach_file(
        self,
        actor: UserIdentity | None,
        block_id: str,
        file_name: str,
        file_url: str,
        file_size: int,
        file_type: str,
    ) -> CommandResult[Block]:
        """Record the metadata of an uploaded file on a block."""
        if file_size < 0:
            return CommandResult.invalid("file_size", "must not be negative", str(file_size))
        return self.update_block(
            actor,
            block_id,
            {
                "file_name": file_name,
                "file_url": file_url,
                "file_size": file_size,
                "file_type": file_type,
            },
        )

    def delete_block(self, actor: UserIdentity | None, block_id: str) -> CommandResult[list[str]]:
        """Delete a block.

        A toggle block takes the blocks listed in its children with it.
        That cascade is one level deep: grandchildren stay in storage with
        a parent_block_id that no longer resolves, unless
        config.recursive_toggle_delete is set. A nested block is also
        removed from its parent's children list.

        Returns:
            CommandResult whose entity is the removed block ids
        """
        block, failure = self._editable_block(actor, block_id)
        if failure is not None:
            return failure

        doomed = {block_id}
        if block.is_nestable() and block.has_children():
            if self.config.recursive_toggle_delete:
                doomed.update(self._nested_ids(block))
            else:
                doomed.update(block.children)

        removed = self.store.remove_blocks(doomed)

        if block.parent_block_id is not None:
            parent = self.store.get_block(block.parent_block_id)
            if parent is not None and parent.children is not None:
                parent.children = [cid for cid in parent.children if cid != block_id]

        if len(removed) > 1:
            logger.info(f"Deleted toggle block {block_id} with {len(removed) - 1} nested blocks")
        else:
            logger.debug(f"Deleted block {block_id}")
        return CommandResult.applied(removed)

    def toggle_block_expansion(
        self, actor: UserIdentity | None, block_id: str
    ) -> CommandResult[Block]:
        """Flip a block's is_expanded flag (gated, unlike page expansion)."""
        block, failure = self._editable_block(actor, block_id)
        if failure is not None:
            return failure
        block.is_expanded = not block.is_expanded
        return CommandResult.applied(block)

    # =========================================================================
    # Helpers
    # =========================================================================

    def owning_page(self, block: Block) -> Page | None:
        return self.store.get_page(block.page_id)

    def _editable_block(
        self, actor: UserIdentity | None, block_id: str
    ) -> tuple[Block | None, CommandResult | None]:
        """Resolve a block and check edit rights on its owning page."""
        block = self.store.get_block(block_id)
        if block is None:
            return None, CommandResult.not_found("block", block_id)

        decision = self.policy.check_edit(actor, self.owning_page(block))
        if not decision.allowed:
            user_id = actor.user_id if actor else None
            logger.debug(f"Edit of block {block_id} denied for {user_id}: {decision.reason}")
            return None, CommandResult.denied(decision.reason, user_id, block.page_id)

        return block, None

    def _nested_ids(self, toggle: Block) -> set[str]:
        """Every id reachable through children lists below a toggle."""
        found: set[str] = set()
        stack = list(toggle.children or [])
        while stack:
            child_id = stack.pop()
            if child_id in found or child_id == toggle.id:
                continue
            found.add(child_id)
            child = self.store.get_block(child_id)
            if child is not None and child.children:
                stack.extend(child.children)
        return found
