"""
Workspace service facade.

Wires one store to the page tree, block store, type transitions and
user directory, and runs every command as the user the identity
provider reports. UIs and API layers talk to this class; the
components underneath take the actor explicitly.
"""

from __future__ import annotations

import logging
from typing import Any

from .access import AccessPolicy
from .blocks import Block, BlockStore, BlockTypeTransition, ContentEdit, ConvertBlock
from .blocks.types import BlockType
from .config import WorkspaceConfig
from .id_utils import IdGenerator, TimestampIdGenerator
from .identity import IdentityProvider, UserDirectory, UserIdentity, UserRole
from .logging_utils import WorkspaceLoggerAdapter
from .pages import Page, PageTree, Template, Workspace
from .results import CommandResult
from .store import WorkspaceStore

logger = logging.getLogger(__name__)


class WorkspaceService:
    """Single entry point for queries and commands on a workspace.

    Usage:
        service = WorkspaceService.from_config(config, provider)
        page = service.add_page().unwrap()
        block = service.get_page_blocks(page.id)[0]
        service.edit_block_content(block.id, "Groceries/")
        service.convert_block(block.id, BlockType.TODO)
    """

    def __init__(
        self,
        store: WorkspaceStore,
        identity_provider: IdentityProvider,
        config: WorkspaceConfig | None = None,
        users: UserDirectory | None = None,
        id_generator: IdGenerator | None = None,
        policy: AccessPolicy | None = None,
    ):
        self.store = store
        self.identity_provider = identity_provider
        self.config = config or WorkspaceConfig()
        self.policy = policy or AccessPolicy()
        self.id_generator = id_generator or TimestampIdGenerator()
        self.users = users or UserDirectory(policy=self.policy, id_generator=self.id_generator)

        self.pages = PageTree(store, self.policy, self.id_generator, self.config)
        self.blocks = BlockStore(store, self.policy, self.id_generator, self.config)
        self.transitions = BlockTypeTransition(self.blocks)

    @classmethod
    def from_config(
        cls,
        config: WorkspaceConfig,
        identity_provider: IdentityProvider,
        users: UserDirectory | None = None,
        id_generator: IdGenerator | None = None,
    ) -> WorkspaceService:
        """Create a service over a fresh, empty workspace."""
        store = WorkspaceStore(Workspace(id=config.workspace_id, name=config.workspace_name))
        return cls(store, identity_provider, config, users=users, id_generator=id_generator)

    @property
    def current_user(self) -> UserIdentity | None:
        return self.identity_provider.current_or_none()

    def _log(self) -> WorkspaceLoggerAdapter:
        actor = self.current_user
        return WorkspaceLoggerAdapter(
            logger,
            {
                "workspace_id": self.store.workspace.id,
                "actor_id": actor.user_id if actor else None,
            },
        )

    # =========================================================================
    # Workspace
    # =========================================================================

    @property
    def workspace(self) -> Workspace:
        return self.store.workspace

    def update_workspace_name(self, name: str) -> CommandResult[Workspace]:
        """Rename the workspace. Admin only."""
        actor = self.current_user
        decision = self.policy.check_admin(actor)
        if not decision.allowed:
            return CommandResult.denied(decision.reason, actor.user_id if actor else None)

        cleaned = name.strip()
        if not cleaned:
            return CommandResult.invalid("name", "must not be blank", name)

        self.store.workspace.name = cleaned
        self._log().info(f"Workspace renamed to {cleaned}")
        return CommandResult.applied(self.store.workspace)

    def add_user(
        self, display_name: str, role: UserRole | str = UserRole.MEMBER
    ) -> CommandResult[UserIdentity]:
        return self.users.add_user(self.current_user, display_name, role)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_page(self, page_id: str) -> Page | None:
        return self.pages.get_page(page_id)

    def list_pages(self) -> list[Page]:
        return self.pages.list_pages()

    def templates(self) -> list[Template]:
        return self.store.templates()

    def get_block(self, block_id: str) -> Block | None:
        return self.blocks.get_block(block_id)

    def get_page_blocks(self, page_id: str) -> list[Block]:
        return self.blocks.get_page_blocks(page_id)

    def get_child_blocks(self, parent_block_id: str) -> list[Block]:
        return self.blocks.get_child_blocks(parent_block_id)

    def can_edit_page(self, page_id: str) -> bool:
        return self.pages.can_edit_page(self.current_user, page_id)

    def can_edit_block(self, block_id: str) -> bool:
        return self.blocks.can_edit_block(self.current_user, block_id)

    def access_members(self, page_id: str) -> list[UserIdentity]:
        """Known users on a page's access list, in grant order."""
        page = self.pages.get_page(page_id)
        if page is None:
            return []
        return [user for uid in page.access if (user := self.users.get(uid)) is not None]

    def snapshot(self) -> dict[str, Any]:
        return self.store.to_dict()

    # =========================================================================
    # Page commands
    # =========================================================================

    def add_page(self, parent_id: str | None = None) -> CommandResult[Page]:
        return self.pages.add_page(self.current_user, parent_id)

    def update_page_title(self, page_id: str, title: str) -> CommandResult[Page]:
        return self.pages.update_page_title(self.current_user, page_id, title)

    def update_page_icon(self, page_id: str, icon: str) -> CommandResult[Page]:
        return self.pages.update_page_icon(self.current_user, page_id, icon)

    def update_page_access(self, page_id: str, user_ids: list[str]) -> CommandResult[Page]:
        return self.pages.update_page_access(self.current_user, page_id, user_ids)

    def grant_access(self, page_id: str, user_id: str) -> CommandResult[Page]:
        return self.pages.grant_access(self.current_user, page_id, user_id)

    def revoke_access(self, page_id: str, user_id: str) -> CommandResult[Page]:
        return self.pages.revoke_access(self.current_user, page_id, user_id)

    def delete_page(self, page_id: str) -> CommandResult[list[str]]:
        result = self.pages.delete_page(self.current_user, page_id)
        if result.ok:
            self._log().info(
                f"Page {page_id} deleted",
                extra={"page_id": page_id, "removed_pages": result.entity},
            )
        return result

    def select_page(self, page_id: str) -> CommandResult[Page]:
        return self.pages.select_page(page_id)

    def select_template(self, template_id: str) -> CommandResult[Template]:
        return self.pages.select_template(template_id)

    def toggle_page_expansion(self, page_id: str) -> CommandResult[Page]:
        return self.pages.toggle_page_expansion(page_id)

    # =========================================================================
    # Block commands
    # =========================================================================

    def add_block(
        self,
        page_id: str,
        after_block_id: str | None = None,
        parent_block_id: str | None = None,
    ) -> CommandResult[Block]:
        return self.blocks.add_block(self.current_user, page_id, after_block_id, parent_block_id)

    def update_block(self, block_id: str, fields: dict[str, Any]) -> CommandResult[Block]:
        return self.blocks.update_block(self.current_user, block_id, fields)

    def delete_block(self, block_id: str) -> CommandResult[list[str]]:
        result = self.blocks.delete_block(self.current_user, block_id)
        if result.ok:
            self._log().info(
                f"Block {block_id} deleted",
                extra={"block_id": block_id, "removed_blocks": result.entity},
            )
        return result

    def toggle_block_expansion(self, block_id: str) -> CommandResult[Block]:
        return self.blocks.toggle_block_expansion(self.current_user, block_id)

    def edit_block_content(self, block_id: str, content: str) -> ContentEdit:
        return self.transitions.edit_content(self.current_user, block_id, content)

    def convert_block(self, block_id: str, target_type: BlockType | str) -> CommandResult[Block]:
        return self.transitions.convert(self.current_user, ConvertBlock(block_id, target_type))

    def dismiss_block_menu(self, block_id: str) -> CommandResult[Block]:
        return self.transitions.dismiss(self.current_user, block_id)
