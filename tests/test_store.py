"""Tests for the in-memory workspace store."""

from __future__ import annotations

import pytest

from workspace_docs.blocks import Block, BlockType
from workspace_docs.pages import Page, Workspace
from workspace_docs.store import WorkspaceStore


@pytest.fixture
def filled(store: WorkspaceStore) -> WorkspaceStore:
    store.add_page(Page("page-1", "Root", "user-1"))
    store.add_page(Page("page-2", "Child", "user-1", parent_id="page-1"))
    store.insert_block(Block("block-1", "page-1", BlockType.HEADING, "Hello"))
    store.insert_block(Block("block-2", "page-2", BlockType.TOGGLE, children=[], is_expanded=False))
    store.insert_block(Block("block-3", "page-2", parent_block_id="block-2"))
    store.get_block("block-2").children.append("block-3")
    store.selected_page_id = "page-2"
    return store


class TestWorkspaceStore:
    def test_page_gets_creator_in_access(self) -> None:
        page = Page("page-9", "Solo", "user-4", access=["user-2"])
        assert page.access == ["user-4", "user-2"]

    def test_duplicate_ids_rejected_across_kinds(self, filled) -> None:
        with pytest.raises(ValueError):
            filled.add_page(Page("block-1", "Clash", "user-1"))
        with pytest.raises(ValueError):
            filled.insert_block(Block("page-1", "page-1"))

    def test_parent_must_exist(self, store) -> None:
        with pytest.raises(ValueError):
            store.add_page(Page("page-1", "Orphan", "user-1", parent_id="page-404"))

    def test_block_page_must_exist(self, store) -> None:
        with pytest.raises(ValueError):
            store.insert_block(Block("block-1", "page-404"))

    def test_unused_id_skips_taken(self, filled) -> None:
        issued = iter(["page-1", "block-1", "page-3"])
        assert filled.unused_id(lambda prefix: next(issued), "page") == "page-3"

    def test_remove_pages_takes_blocks(self, filled) -> None:
        removed_pages, removed_blocks = filled.remove_pages({"page-2"})

        assert removed_pages == ["page-2"]
        assert removed_blocks == ["block-2", "block-3"]
        assert [b.id for b in filled.blocks()] == ["block-1"]
        assert filled.get_block("block-3") is None

    def test_block_position(self, filled) -> None:
        assert filled.block_position("block-3") == 2
        assert filled.block_position("block-404") == -1

    def test_templates(self, store) -> None:
        assert [t.id for t in store.templates()] == ["template-roadmap", "template-calendar"]
        assert store.get_template("template-404") is None


class TestSnapshots:
    def test_block_dict_omits_unset_fields(self) -> None:
        data = Block("block-1", "page-1", BlockType.TEXT, "Hi").to_dict()
        assert data == {"id": "block-1", "page_id": "page-1", "type": "text", "content": "Hi"}

    def test_restore(self, filled) -> None:
        restored = WorkspaceStore.from_dict(filled.to_dict())

        assert restored.to_dict() == filled.to_dict()
        assert restored.get_block("block-2").children == ["block-3"]
        assert restored.get_page("page-2").parent_id == "page-1"
        assert restored.selected_page_id == "page-2"

    def test_restore_children_before_parents(self, filled) -> None:
        data = filled.to_dict()
        data["pages"].reverse()

        restored = WorkspaceStore.from_dict(data)

        assert [p.id for p in restored.pages()] == ["page-1", "page-2"]

    def test_restore_rejects_orphans(self) -> None:
        data = {
            "workspace": Workspace("workspace-1", "Broken").to_dict(),
            "pages": [Page("page-2", "Lost", "user-1", parent_id="page-1").to_dict()],
        }

        with pytest.raises(ValueError):
            WorkspaceStore.from_dict(data)
