"""Print the sample workspace as a page tree, one user at a time.

Shows which pages each demo user may edit and walks one slash-menu
conversion end to end.

Usage:
    python scripts/show_demo_workspace.py [--json-logs]
"""

from __future__ import annotations

import logging
import sys

from workspace_docs import BlockType, WorkspaceConfig, build_demo_workspace
from workspace_docs.logging_utils import configure_from_config
from workspace_docs.service import WorkspaceService

logging.basicConfig(level=logging.INFO, format="%(levelname)s  %(message)s")


def print_tree(service: WorkspaceService, parent_id: str | None = None, depth: int = 0) -> None:
    children = service.pages.child_pages(parent_id) if parent_id else service.pages.root_pages()
    for page in children:
        mark = "✎" if service.can_edit_page(page.id) else " "
        print(f"  {mark} {'    ' * depth}{page.icon} {page.title} ({page.id})")
        print_tree(service, page.id, depth + 1)


def main() -> int:
    config = WorkspaceConfig(json_logs="--json-logs" in sys.argv[1:])
    configure_from_config(config)

    for user_id in ("user-1", "user-2", "user-3"):
        service = build_demo_workspace(signed_in=user_id, config=config)
        print(f"\n{service.workspace.name} as {service.current_user.display_name}")
        print_tree(service)

    service = build_demo_workspace(signed_in="user-2", config=config)
    block = service.add_block("page-1", after_block_id="block-2").unwrap()
    edit = service.edit_block_content(block.id, "Buy groceries/")
    print(f"\nMenu open after typing the trigger: {edit.menu_open}")
    converted = service.convert_block(block.id, BlockType.TODO).unwrap()
    print(f"Converted {converted.id}: type={converted.type.value} content={converted.content!r}")

    denied = service.update_page_title("page-2", "Bob's project")
    print(f"Bob renaming page-2: {denied.outcome.value} ({denied.reason})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
