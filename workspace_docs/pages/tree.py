"""Page forest operations.

Pages are created, renamed, re-permissioned, selected, expanded and
deleted here. Every content mutation is gated by the access policy on
the target page; navigation state (selection, expansion) is not.
Deleting a page cascades to all of its descendant pages and to every
block those pages own.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..access import AccessPolicy
from ..blocks.types import Block
from ..config import WorkspaceConfig
from ..id_utils import IdGenerator, TimestampIdGenerator
from ..identity.types import UserIdentity
from ..results import CommandResult
from .types import Page, Template

if TYPE_CHECKING:
    from ..store import WorkspaceStore

logger = logging.getLogger(__name__)


class PageTree:
    """Commands and queries over the page forest of one store."""

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

    # =========================================================================
    # Queries
    # =========================================================================

    def get_page(self, page_id: str) -> Page | None:
        return self.store.get_page(page_id)

    def list_pages(self) -> list[Page]:
        return self.store.pages()

    def root_pages(self) -> list[Page]:
        return self.store.child_pages(None)

    def child_pages(self, page_id: str) -> list[Page]:
        return self.store.child_pages(page_id)

    def descendant_ids(self, page_id: str) -> list[str]:
        """All transitive descendants of a page, depth-first, excluding itself."""
        result: list[str] = []
        seen = {page_id}
        self._collect_descendants(page_id, result, seen)
        return result

    def _collect_descendants(self, parent_id: str, result: list[str], seen: set[str]) -> None:
        for child in self.store.child_pages(parent_id):
            if child.id in seen:
                continue
            seen.add(child.id)
            result.append(child.id)
            self._collect_descendants(child.id, result, seen)

    def ancestors(self, page_id: str) -> list[Page]:
        """Ancestors of a page, from immediate parent to root."""
        ancestors: list[Page] = []
        seen = {page_id}
        page = self.store.get_page(page_id)
        while page is not None and page.parent_id is not None and page.parent_id not in seen:
            parent = self.store.get_page(page.parent_id)
            if parent is None:
                break
            ancestors.append(parent)
            seen.add(parent.id)
            page = parent
        return ancestors

    def can_edit_page(self, actor: UserIdentity | None, page_id: str) -> bool:
        return self.policy.can_edit_page(actor, self.store, page_id)

    @property
    def selected_page(self) -> Page | None:
        return self.store.get_page(self.store.selected_page_id)

    @property
    def selected_template(self) -> Template | None:
        if self.store.selected_template_id is None:
            return None
        return self.store.get_template(self.store.selected_template_id)

    # =========================================================================
    # Commands
    # =========================================================================

    def add_page(
        self, actor: UserIdentity | None, parent_id: str | None = None
    ) -> CommandResult[Page]:
        """Create a root page, or a sub-page when parent_id is given.

        A sub-page needs edit rights on the parent. A parent id that
        does not resolve fails the same gate, so it reports DENIED
        rather than NOT_FOUND.

        The new page is owned by the actor, starts with the actor as its
        only editor, becomes the selection, and gets one empty text block.
        """
        if actor is None:
            return CommandResult.denied("anonymous", page_id=parent_id)

        parent: Page | None = None
        if parent_id is not None:
            parent = self.store.get_page(parent_id)
            decision = self.policy.check_edit(actor, parent)
            if not decision.allowed:
                logger.debug(f"add_page denied for {actor.user_id} under {parent_id}: {decision.reason}")
                return CommandResult.denied(decision.reason, actor.user_id, parent_id)

        page = self.store.add_page(
            Page(
                id=self.store.unused_id(self.id_generator.new_id, "page"),
                title=self.config.default_page_title,
                creator_id=actor.user_id,
                parent_id=parent_id,
                access=[actor.user_id],
                is_expanded=False,
                icon=self.config.default_page_icon,
            )
        )
        if parent is not None:
            parent.is_expanded = True

        self.store.insert_block(
            Block(id=self.store.unused_id(self.id_generator.new_id, "block"), page_id=page.id)
        )
        self.select_page(page.id)

        logger.debug(f"Page {page.id} created by {actor.user_id} (parent: {parent_id})")
        return CommandResult.applied(page)

    def update_page_title(
        self, actor: UserIdentity | None, page_id: str, title: str
    ) -> CommandResult[Page]:
        """Rename a page. Surrounding whitespace is dropped; blank titles are invalid."""
        page, failure = self._editable_page(actor, page_id)
        if failure is not None:
            return failure

        cleaned = title.strip()
        if not cleaned:
            return CommandResult.invalid("title", "must not be blank", title)

        page.title = cleaned
        logger.debug(f"Page {page_id} renamed")
        return CommandResult.applied(page)

    def update_page_icon(
        self, actor: UserIdentity | None, page_id: str, icon: str
    ) -> CommandResult[Page]:
        page, failure = self._editable_page(actor, page_id)
        if failure is not None:
            return failure

        if not icon.strip():
            return CommandResult.invalid("icon", "must not be blank", icon)

        page.icon = icon.strip()
        return CommandResult.applied(page)

    def update_page_access(
        self, actor: UserIdentity | None, page_id: str, user_ids: list[str]
    ) -> CommandResult[Page]:
        """Replace a page's access list.

        The creator can never be removed: a list without the creator is
        rejected and the access list stays as it was. Duplicates are
        dropped, first occurrence wins.
        """
        page, failure = self._editable_page(actor, page_id)
        if failure is not None:
            return failure

        access = list(dict.fromkeys(user_ids))
        if page.creator_id not in access:
            return CommandResult.invalid("access", "cannot remove the page creator", page.creator_id)

        page.access = access
        logger.debug(f"Access for page {page_id} set to {access}")
        return CommandResult.applied(page)

    def grant_access(
        self, actor: UserIdentity | None, page_id: str, user_id: str
    ) -> CommandResult[Page]:
        """Add one user to a page's access list (no-op if already present)."""
        page = self.store.get_page(page_id)
        if page is None:
            return CommandResult.not_found("page", page_id)
        return self.update_page_access(actor, page_id, [*page.access, user_id])

    def revoke_access(
        self, actor: UserIdentity | None, page_id: str, user_id: str
    ) -> CommandResult[Page]:
        """Remove one user from a page's access list; the creator cannot be revoked."""
        page = self.store.get_page(page_id)
        if page is None:
            return CommandResult.not_found("page", page_id)
        return self.update_page_access(
            actor, page_id, [uid for uid in page.access if uid != user_id]
        )

    def delete_page(self, actor: UserIdentity | None, page_id: str) -> CommandResult[list[str]]:
        """Delete a page, all its descendant pages, and every block they own.

        If the selection was among the removed pages it falls back to the
        first remaining page, or to nothing when no pages remain.

        Returns:
            CommandResult whose entity is the removed page ids
        """
        _, failure = self._editable_page(actor, page_id)
        if failure is not None:
            return failure

        doomed = {page_id, *self.descendant_ids(page_id)}
        removed_pages, removed_blocks = self.store.remove_pages(doomed)

        if self.store.selected_page_id in doomed:
            remaining = self.store.pages()
            self.store.selected_page_id = remaining[0].id if remaining else None

        logger.info(
            f"Deleted page {page_id} with {len(removed_pages) - 1} descendants "
            f"and {len(removed_blocks)} blocks"
        )
        return CommandResult.applied(removed_pages)

    def select_page(self, page_id: str) -> CommandResult[Page]:
        """Select a page; clears any template selection."""
        page = self.store.get_page(page_id)
        if page is None:
            return CommandResult.not_found("page", page_id)
        self.store.selected_page_id = page_id
        self.store.selected_template_id = None
        return CommandResult.applied(page)

    def select_template(self, template_id: str) -> CommandResult[Template]:
        """Select a template; clears any page selection."""
        template = self.store.get_template(template_id)
        if template is None:
            return CommandResult.not_found("template", template_id)
        self.store.selected_template_id = template_id
        self.store.selected_page_id = None
        return CommandResult.applied(template)

    def toggle_page_expansion(self, page_id: str) -> CommandResult[Page]:
        """Flip the navigation expansion flag. Not gated: it is not content."""
        page = self.store.get_page(page_id)
        if page is None:
            return CommandResult.not_found("page", page_id)
        page.is_expanded = not page.is_expanded
        return CommandResult.applied(page)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _editable_page(
        self, actor: UserIdentity | None, page_id: str
    ) -> tuple[Page | None, CommandResult | None]:
        """Resolve a page and check edit rights on it."""
        page = self.store.get_page(page_id)
        if page is None:
            return None, CommandResult.not_found("page", page_id)

        decision = self.policy.check_edit(actor, page)
        if not decision.allowed:
            user_id = actor.user_id if actor else None
            logger.debug(f"Edit of page {page_id} denied for {user_id}: {decision.reason}")
            return None, CommandResult.denied(decision.reason, user_id, page_id)

        return page, None
