"""Sample workspace used by the demo script and the test-suite."""

from __future__ import annotations

from datetime import UTC, datetime

from .blocks.types import Block, BlockType
from .config import WorkspaceConfig
from .id_utils import SequentialIdGenerator
from .identity import StaticIdentityProvider, UserDirectory, UserIdentity, UserRole
from .pages.types import Page, Workspace
from .service import WorkspaceService
from .store import WorkspaceStore

DEMO_USERS: tuple[UserIdentity, ...] = (
    UserIdentity("user-1", "Admin Rey", UserRole.ADMIN, avatar="A"),
    UserIdentity("user-2", "User Bob", UserRole.MEMBER, avatar="B"),
    UserIdentity("user-3", "User Charlie", UserRole.MEMBER, avatar="C"),
)


def _day(day: int) -> datetime:
    return datetime(2025, 1, day, tzinfo=UTC)


def _demo_pages() -> list[Page]:
    return [
        Page("page-1", "Welcome Page", "user-1", None, ["user-1", "user-2"], _day(1), True, "👋"),
        Page("page-2", "Project A", "user-1", None, ["user-1"], _day(2), True, "🚀"),
        Page("page-3", "Task List", "user-1", "page-2", ["user-1"], _day(3), False, "✅"),
        Page("page-4", "Meeting Notes", "user-2", "page-2", ["user-2", "user-1"], _day(4), False, "📝"),
        Page(
            "page-5",
            "Resources (Read-only for Bob)",
            "user-3",
            None,
            ["user-3", "user-1"],
            _day(5),
            False,
            "📚",
        ),
    ]


def _demo_blocks() -> list[Block]:
    return [
        Block("block-1", "page-1", BlockType.HEADING, "Welcome to your enhanced workspace!"),
        Block("block-2", "page-1", BlockType.TEXT, "This page is editable by Admin Rey and User Bob."),
        Block("block-8", "page-2", BlockType.HEADING, "Project Overview"),
        Block("block-9", "page-2", BlockType.TEXT, "This page is only editable by Admin Rey."),
    ]


def build_demo_workspace(
    signed_in: str | None = "user-1",
    config: WorkspaceConfig | None = None,
) -> WorkspaceService:
    """Build the "Kelas REY" sample workspace.

    Args:
        signed_in: User id to act as, or None for a signed-out session
        config: Optional config; the workspace id and name are always the sample's

    Returns:
        Service over a store holding three users, five pages and four blocks,
        with page-1 selected. New ids continue after the seeded ones.
    """
    ids = SequentialIdGenerator()
    store = WorkspaceStore(Workspace(id="workspace-1", name="Kelas REY"))

    for page in _demo_pages():
        store.add_page(page)
        ids.advance_past(page.id)
    for block in _demo_blocks():
        store.insert_block(block)
        ids.advance_past(block.id)
    store.selected_page_id = "page-1"

    users = UserDirectory(id_generator=ids)
    for user in DEMO_USERS:
        users.register(UserIdentity.from_dict(user.to_dict()))
        ids.advance_past(user.user_id)

    provider = StaticIdentityProvider(users.get(signed_in) if signed_in else None)
    return WorkspaceService(store, provider, config, users=users, id_generator=ids)
