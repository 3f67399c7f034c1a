"""Access policy for page mutations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .permissions import AccessDecision, Permission

if TYPE_CHECKING:
    from ..identity.types import UserIdentity
    from ..pages.types import Page
    from ..store import WorkspaceStore


class AccessPolicy:
    """Centralized access control for pages and their blocks.

    Decisions are keyed by page: a block is editable exactly when its
    owning page is. Admins may edit everything; everyone else needs to
    be on the page's access list.
    """

    def check_edit(self, user: UserIdentity | None, page: Page | None) -> AccessDecision:
        """Check if user may mutate a page (or any block it owns).

        Args:
            user: User requesting the mutation (None when nobody is signed in)
            page: Target page, or None when the id did not resolve

        Returns:
            AccessDecision with allowed status and reason
        """
        if user is None:
            return AccessDecision(allowed=False, reason="anonymous")

        # A page that does not exist is never editable, not even by admins
        if page is None:
            return AccessDecision(allowed=False, reason="page_not_found")

        if user.is_admin:
            return AccessDecision(allowed=True, reason="admin", permission_level=Permission.ADMIN)

        if user.user_id in page.access:
            return AccessDecision(
                allowed=True, reason="access_list", permission_level=Permission.EDIT
            )

        return AccessDecision(allowed=False, reason="not_in_access_list")

    def can_edit(self, user: UserIdentity | None, page: Page | None) -> bool:
        return self.check_edit(user, page).allowed

    def can_edit_page(
        self, user: UserIdentity | None, store: WorkspaceStore, page_id: str
    ) -> bool:
        """Convenience query by page id; False when the page is missing."""
        return self.can_edit(user, store.get_page(page_id))

    def check_admin(self, user: UserIdentity | None) -> AccessDecision:
        """Check workspace-level privileges (rename workspace, add users)."""
        if user is None:
            return AccessDecision(allowed=False, reason="anonymous")
        if user.is_admin:
            return AccessDecision(allowed=True, reason="admin", permission_level=Permission.ADMIN)
        return AccessDecision(allowed=False, reason="admin_only")
