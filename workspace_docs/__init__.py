"""
Workspace Docs

A hierarchical, permissioned workspace of pages and typed content blocks.

Features:
- Page forest with cascading deletes and per-page access lists
- Typed blocks (text, heading, todo, image, file, toggle, divider, code)
  with one-level nesting under toggles
- Slash-menu block type conversion, re-checked at commit time
- Typed command results instead of silent no-ops
- YAML and environment configuration, structured logging
"""

from .exceptions import (
    AuthenticationRequiredError,
    BlockNotFoundError,
    EntityNotFoundError,
    PageNotFoundError,
    PermissionDeniedError,
    TemplateNotFoundError,
    ValidationError,
    WorkspaceError,
)
from .results import CommandResult, Outcome
from .id_utils import IdGenerator, SequentialIdGenerator, TimestampIdGenerator
from .config import WorkspaceConfig
from .identity import (
    ConfigFileIdentityProvider,
    IdentityProvider,
    StaticIdentityProvider,
    UserDirectory,
    UserIdentity,
    UserRole,
)
from .access import AccessDecision, AccessPolicy, Permission
from .pages import Page, PageTree, Template, TemplateKind, Workspace
from .blocks import (
    BLOCK_MENU,
    Block,
    BlockKindOption,
    BlockStore,
    BlockType,
    BlockTypeTransition,
    ContentEdit,
    ConvertBlock,
)
from .store import WorkspaceStore
from .service import WorkspaceService
from .demo import build_demo_workspace

__version__ = "0.1.0"

__all__ = [
    # Errors
    "WorkspaceError",
    "EntityNotFoundError",
    "PageNotFoundError",
    "BlockNotFoundError",
    "TemplateNotFoundError",
    "PermissionDeniedError",
    "ValidationError",
    "AuthenticationRequiredError",
    # Results
    "CommandResult",
    "Outcome",
    # IDs
    "IdGenerator",
    "TimestampIdGenerator",
    "SequentialIdGenerator",
    # Config
    "WorkspaceConfig",
    # Identity
    "UserIdentity",
    "UserRole",
    "IdentityProvider",
    "StaticIdentityProvider",
    "ConfigFileIdentityProvider",
    "UserDirectory",
    # Access
    "AccessPolicy",
    "AccessDecision",
    "Permission",
    # Pages
    "Page",
    "PageTree",
    "Template",
    "TemplateKind",
    "Workspace",
    # Blocks
    "Block",
    "BlockType",
    "BlockStore",
    "BlockTypeTransition",
    "BlockKindOption",
    "BLOCK_MENU",
    "ContentEdit",
    "ConvertBlock",
    # Store and service
    "WorkspaceStore",
    "WorkspaceService",
    "build_demo_workspace",
]
