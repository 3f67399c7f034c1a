"""Tests for page forest operations."""

from __future__ import annotations

import pytest

from workspace_docs.config import WorkspaceConfig
from workspace_docs.identity import UserIdentity
from workspace_docs.pages import PageTree
from workspace_docs.results import Outcome


@pytest.fixture
def project(pages: PageTree, admin):
    """Project A with two sub-pages, one of which has its own child.

    page-1 (Project A)
      page-2 (Tasks)
        page-3 (Subtasks)
      page-4 (Notes)
    """
    root = pages.add_page(admin).unwrap()
    tasks = pages.add_page(admin, root.id).unwrap()
    subtasks = pages.add_page(admin, tasks.id).unwrap()
    notes = pages.add_page(admin, root.id).unwrap()
    return root, tasks, subtasks, notes


class TestAddPage:
    """Tests for page creation."""

    def test_root_page_defaults(self, pages, store, member) -> None:
        """A new page carries defaults, is selected and gets one empty text block."""
        result = pages.add_page(member)

        assert result.ok
        page = result.entity
        assert page.id == "page-1"
        assert page.title == "Untitled"
        assert page.icon == "📄"
        assert page.parent_id is None
        assert page.creator_id == "user-2"
        assert page.access == ["user-2"]
        assert page.is_expanded is False
        assert store.selected_page_id == page.id

        page_blocks = store.blocks_where(lambda b: b.page_id == page.id)
        assert len(page_blocks) == 1
        assert page_blocks[0].type.value == "text"
        assert page_blocks[0].content == ""

    def test_sub_page_expands_parent(self, pages, admin) -> None:
        parent = pages.add_page(admin).unwrap()
        assert parent.is_expanded is False

        child = pages.add_page(admin, parent.id).unwrap()

        assert child.parent_id == parent.id
        assert parent.is_expanded is True
        assert pages.child_pages(parent.id) == [child]

    def test_new_page_clears_template_selection(self, pages, store, admin) -> None:
        pages.select_template("template-roadmap")

        page = pages.add_page(admin).unwrap()

        assert store.selected_page_id == page.id
        assert store.selected_template_id is None

    def test_missing_parent_is_denied(self, pages, store, admin) -> None:
        result = pages.add_page(admin, "page-404")

        assert result.outcome is Outcome.DENIED
        assert result.reason == "page_not_found"
        assert store.pages() == []

    def test_sub_page_requires_parent_edit_rights(self, pages, store, admin, member) -> None:
        private = pages.add_page(admin).unwrap()

        result = pages.add_page(member, private.id)

        assert result.outcome is Outcome.DENIED
        assert result.reason == "not_in_access_list"
        assert pages.child_pages(private.id) == []
        assert len(store.pages()) == 1

    def test_anonymous_cannot_add(self, pages, store) -> None:
        assert pages.add_page(None).outcome is Outcome.DENIED
        assert store.pages() == []

    def test_custom_defaults_from_config(self, store, policy, ids) -> None:
        config = WorkspaceConfig(default_page_title="Draft", default_page_icon="✏️")
        tree = PageTree(store, policy, ids, config)

        page = tree.add_page(UserIdentity("user-5", "Eve")).unwrap()

        assert page.title == "Draft"
        assert page.icon == "✏️"


class TestPageQueries:
    """Tests for read-side helpers."""

    def test_descendants_depth_first(self, pages, project) -> None:
        root, tasks, subtasks, notes = project
        assert pages.descendant_ids(root.id) == [tasks.id, subtasks.id, notes.id]
        assert pages.descendant_ids(notes.id) == []

    def test_ancestors(self, pages, project) -> None:
        root, tasks, subtasks, _ = project
        assert pages.ancestors(subtasks.id) == [tasks, root]
        assert pages.ancestors(root.id) == []

    def test_root_pages(self, pages, project, admin) -> None:
        other = pages.add_page(admin).unwrap()
        assert pages.root_pages() == [project[0], other]

    def test_can_edit_page(self, pages, project, admin, member) -> None:
        root = project[0]
        assert pages.can_edit_page(admin, root.id)
        assert not pages.can_edit_page(member, root.id)
        assert not pages.can_edit_page(admin, "page-404")


class TestUpdatePage:
    """Tests for title, icon and access updates."""

    def test_title(self, pages, admin) -> None:
        page = pages.add_page(admin).unwrap()

        result = pages.update_page_title(admin, page.id, "  Roadmap Q3 ")

        assert result.ok
        assert page.title == "Roadmap Q3"

    def test_blank_title_invalid(self, pages, admin) -> None:
        page = pages.add_page(admin).unwrap()

        result = pages.update_page_title(admin, page.id, "   ")

        assert result.outcome is Outcome.INVALID
        assert page.title == "Untitled"

    def test_title_denied_for_outsider(self, pages, admin, outsider) -> None:
        page = pages.add_page(admin).unwrap()

        result = pages.update_page_title(outsider, page.id, "Hijacked")

        assert result.outcome is Outcome.DENIED
        assert page.title == "Untitled"

    def test_title_of_missing_page(self, pages, admin) -> None:
        result = pages.update_page_title(admin, "page-404", "Nope")
        assert result.outcome is Outcome.NOT_FOUND
        assert result.reason == "page_not_found"

    def test_icon(self, pages, member) -> None:
        page = pages.add_page(member).unwrap()

        assert pages.update_page_icon(member, page.id, "🚀").ok
        assert page.icon == "🚀"
        assert pages.update_page_icon(member, page.id, "").outcome is Outcome.INVALID

    def test_access_replaced_and_deduplicated(self, pages, admin) -> None:
        page = pages.add_page(admin).unwrap()

        result = pages.update_page_access(admin, page.id, ["user-1", "user-2", "user-2", "user-3"])

        assert result.ok
        assert page.access == ["user-1", "user-2", "user-3"]

    def test_creator_cannot_be_removed(self, pages, member) -> None:
        page = pages.add_page(member).unwrap()
        pages.grant_access(member, page.id, "user-3")

        result = pages.update_page_access(member, page.id, ["user-3"])

        assert result.outcome is Outcome.INVALID
        assert page.access == ["user-2", "user-3"]

    def test_grant_and_revoke(self, pages, member, outsider) -> None:
        page = pages.add_page(member).unwrap()

        assert pages.grant_access(member, page.id, outsider.user_id).ok
        assert pages.can_edit_page(outsider, page.id)

        assert pages.revoke_access(member, page.id, outsider.user_id).ok
        assert not pages.can_edit_page(outsider, page.id)

    def test_revoke_creator_invalid(self, pages, admin, member) -> None:
        page = pages.add_page(member).unwrap()

        result = pages.revoke_access(admin, page.id, member.user_id)

        assert result.outcome is Outcome.INVALID
        assert member.user_id in page.access

    def test_granted_user_can_edit(self, pages, admin, member) -> None:
        page = pages.add_page(admin).unwrap()
        assert pages.update_page_title(member, page.id, "Mine").outcome is Outcome.DENIED

        pages.grant_access(admin, page.id, member.user_id)

        assert pages.update_page_title(member, page.id, "Mine").ok


class TestDeletePage:
    """Tests for cascading deletes."""

    def test_cascade_removes_descendants_and_blocks(self, pages, store, project, admin) -> None:
        root, tasks, subtasks, notes = project
        keep = pages.add_page(admin).unwrap()

        result = pages.delete_page(admin, tasks.id)

        assert result.ok
        assert result.entity == [tasks.id, subtasks.id]
        assert [p.id for p in store.pages()] == [root.id, notes.id, keep.id]
        assert {b.page_id for b in store.blocks()} == {root.id, notes.id, keep.id}

    def test_delete_root_of_tree(self, pages, store, project, admin) -> None:
        result = pages.delete_page(admin, project[0].id)

        assert len(result.entity) == 4
        assert store.pages() == []
        assert store.blocks() == []

    def test_selection_falls_back_to_first_page(self, pages, store, project, admin) -> None:
        root, tasks, subtasks, notes = project
        pages.select_page(subtasks.id)

        pages.delete_page(admin, tasks.id)

        assert store.selected_page_id == root.id

    def test_selection_cleared_when_nothing_left(self, pages, store, admin) -> None:
        page = pages.add_page(admin).unwrap()

        pages.delete_page(admin, page.id)

        assert store.selected_page_id is None
        assert pages.selected_page is None

    def test_unrelated_selection_kept(self, pages, store, project, admin) -> None:
        notes = project[3]
        pages.select_page(notes.id)

        pages.delete_page(admin, project[1].id)

        assert store.selected_page_id == notes.id

    def test_denied_leaves_store_unchanged(self, pages, store, project, member) -> None:
        before = store.to_dict()

        result = pages.delete_page(member, project[0].id)

        assert result.outcome is Outcome.DENIED
        assert store.to_dict() == before

    def test_missing_page(self, pages, admin) -> None:
        assert pages.delete_page(admin, "page-404").outcome is Outcome.NOT_FOUND


class TestNavigation:
    """Tests for selection and expansion."""

    def test_select_page_clears_template(self, pages, store, admin) -> None:
        page = pages.add_page(admin).unwrap()
        pages.select_template("template-calendar")
        assert store.selected_page_id is None
        assert pages.selected_template.name == "Calendar"

        assert pages.select_page(page.id).ok
        assert store.selected_template_id is None
        assert pages.selected_page is page

    def test_select_unknown(self, pages) -> None:
        assert pages.select_page("page-404").outcome is Outcome.NOT_FOUND
        assert pages.select_template("template-404").outcome is Outcome.NOT_FOUND

    def test_toggle_expansion_twice_restores(self, pages, admin) -> None:
        page = pages.add_page(admin).unwrap()

        pages.toggle_page_expansion(page.id)
        assert page.is_expanded is True
        pages.toggle_page_expansion(page.id)
        assert page.is_expanded is False

    def test_expansion_is_not_gated(self, pages, admin) -> None:
        page = pages.add_page(admin).unwrap()
        assert pages.toggle_page_expansion(page.id).ok
