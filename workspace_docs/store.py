"""
In-memory workspace store.

Holds every page and block of a workspace as flat id-indexed arenas.
Pages keep insertion order (the navigation order); blocks keep one
global storage order that page and toggle views filter without
re-sorting. The store enforces id uniqueness and referential sanity
but no permissions; PageTree and BlockStore gate every write.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from .blocks.types import Block
from .pages.types import DEFAULT_TEMPLATES, Page, Template, Workspace

logger = logging.getLogger(__name__)


class WorkspaceStore:
    """Arena of pages and blocks plus the current selection.

    Pages and blocks share one identifier namespace.
    """

    def __init__(
        self,
        workspace: Workspace,
        templates: Iterable[Template] = DEFAULT_TEMPLATES,
    ):
        self.workspace = workspace
        self._pages: dict[str, Page] = {}
        self._blocks: list[Block] = []
        self._block_index: dict[str, Block] = {}
        self._templates: dict[str, Template] = {t.id: t for t in templates}
        self.selected_page_id: str | None = None
        self.selected_template_id: str | None = None

    def contains_id(self, entity_id: str) -> bool:
        """Check whether a page or block already uses this id."""
        return entity_id in self._pages or entity_id in self._block_index

    def unused_id(self, new_id: Callable[[str], str], prefix: str) -> str:
        """Mint ids until one is free in this store."""
        candidate = new_id(prefix)
        while self.contains_id(candidate):
            candidate = new_id(prefix)
        return candidate

    # -------------------------------------------------------------------------
    # Pages
    # -------------------------------------------------------------------------

    def get_page(self, page_id: str | None) -> Page | None:
        if page_id is None:
            return None
        return self._pages.get(page_id)

    def pages(self) -> list[Page]:
        """All pages in storage order."""
        return list(self._pages.values())

    def child_pages(self, parent_id: str | None) -> list[Page]:
        """Pages whose parent_id matches, in storage order."""
        return [page for page in self._pages.values() if page.parent_id == parent_id]

    def add_page(self, page: Page) -> Page:
        """Insert a page at the end of storage order.

        Raises:
            ValueError: If the id is taken or the parent does not exist
        """
        if self.contains_id(page.id):
            raise ValueError(f"Duplicate id: {page.id}")
        if page.parent_id is not None and page.parent_id not in self._pages:
            raise ValueError(f"Parent page does not exist: {page.parent_id}")
        self._pages[page.id] = page
        return page

    def remove_pages(self, page_ids: set[str]) -> tuple[list[str], list[str]]:
        """Remove pages and every block they own.

        Returns:
            (removed page ids in storage order, removed block ids in storage order)
        """
        removed_pages = [pid for pid in self._pages if pid in page_ids]
        removed_blocks = [b.id for b in self._blocks if b.page_id in page_ids]

        self._pages = {pid: p for pid, p in self._pages.items() if pid not in page_ids}
        self._drop_blocks(set(removed_blocks))
        return removed_pages, removed_blocks

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------

    def get_block(self, block_id: str | None) -> Block | None:
        if block_id is None:
            return None
        return self._block_index.get(block_id)

    def blocks(self) -> list[Block]:
        """All blocks in global storage order."""
        return list(self._blocks)

    def blocks_where(self, predicate: Callable[[Block], bool]) -> list[Block]:
        """Blocks matching a predicate, in global storage order."""
        return [block for block in self._blocks if predicate(block)]

    def block_position(self, block_id: str) -> int:
        """Index of a block in global storage order, or -1."""
        for index, block in enumerate(self._blocks):
            if block.id == block_id:
                return index
        return -1

    def insert_block(self, block: Block, index: int | None = None) -> Block:
        """Insert a block into global storage order (appended when index is None).

        Raises:
            ValueError: If the id is taken or the owning page does not exist
        """
        if self.contains_id(block.id):
            raise ValueError(f"Duplicate id: {block.id}")
        if block.page_id not in self._pages:
            raise ValueError(f"Owning page does not exist: {block.page_id}")
        if index is None:
            self._blocks.append(block)
        else:
            self._blocks.insert(index, block)
        self._block_index[block.id] = block
        return block

    def remove_blocks(self, block_ids: set[str]) -> list[str]:
        """Remove blocks by id; returns the removed ids in storage order."""
        removed = [b.id for b in self._blocks if b.id in block_ids]
        self._drop_blocks(block_ids)
        return removed

    def _drop_blocks(self, block_ids: set[str]) -> None:
        if not block_ids:
            return
        self._blocks = [b for b in self._blocks if b.id not in block_ids]
        self._block_index = {b.id: b for b in self._blocks}

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------

    def get_template(self, template_id: str) -> Template | None:
        return self._templates.get(template_id)

    def templates(self) -> list[Template]:
        return list(self._templates.values())

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict snapshot of the whole workspace."""
        return {
            "workspace": self.workspace.to_dict(),
            "pages": [page.to_dict() for page in self._pages.values()],
            "blocks": [block.to_dict() for block in self._blocks],
            "templates": [template.to_dict() for template in self._templates.values()],
            "selected_page_id": self.selected_page_id,
            "selected_template_id": self.selected_template_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WorkspaceStore:
        """Rebuild a store from a snapshot.

        Pages are inserted parents-first regardless of snapshot order.
        """
        templates = [Template.from_dict(item) for item in data.get("templates", [])]
        store = cls(Workspace.from_dict(data["workspace"]), templates or DEFAULT_TEMPLATES)
        pending = [Page.from_dict(item) for item in data.get("pages", [])]
        while pending:
            ready = [p for p in pending if p.parent_id is None or p.parent_id in store._pages]
            if not ready:
                orphans = ", ".join(p.id for p in pending)
                raise ValueError(f"Pages with missing or cyclic parents: {orphans}")
            for page in ready:
                store.add_page(page)
            pending = [p for p in pending if p.id not in store._pages]

        for item in data.get("blocks", []):
            store.insert_block(Block.from_dict(item))

        store.selected_page_id = data.get("selected_page_id")
        store.selected_template_id = data.get("selected_template_id")
        logger.debug(
            f"Loaded workspace {store.workspace.id}: "
            f"{len(store._pages)} pages, {len(store._blocks)} blocks"
        )
        return store
