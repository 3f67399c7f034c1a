"""
Shared test configuration and fixtures.

Every fixture builds a fresh in-memory workspace with sequential ids, so
tests can assert on exact ids like ``page-1`` and ``block-2``.
"""

import pytest

from workspace_docs.access import AccessPolicy
from workspace_docs.blocks import BlockStore, BlockTypeTransition
from workspace_docs.config import WorkspaceConfig
from workspace_docs.id_utils import SequentialIdGenerator
from workspace_docs.identity import StaticIdentityProvider, UserDirectory, UserIdentity, UserRole
from workspace_docs.pages import PageTree, Workspace
from workspace_docs.service import WorkspaceService
from workspace_docs.store import WorkspaceStore


@pytest.fixture
def admin() -> UserIdentity:
    return UserIdentity("user-1", "Admin Rey", UserRole.ADMIN)


@pytest.fixture
def member() -> UserIdentity:
    return UserIdentity("user-2", "User Bob", UserRole.MEMBER)


@pytest.fixture
def outsider() -> UserIdentity:
    return UserIdentity("user-3", "User Charlie", UserRole.MEMBER)


@pytest.fixture
def config() -> WorkspaceConfig:
    return WorkspaceConfig(workspace_name="Test Workspace")


@pytest.fixture
def ids() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def store() -> WorkspaceStore:
    return WorkspaceStore(Workspace(id="workspace-1", name="Test Workspace"))


@pytest.fixture
def policy() -> AccessPolicy:
    return AccessPolicy()


@pytest.fixture
def pages(store, policy, ids, config) -> PageTree:
    return PageTree(store, policy, ids, config)


@pytest.fixture
def blocks(store, policy, ids, config) -> BlockStore:
    return BlockStore(store, policy, ids, config)


@pytest.fixture
def transition(blocks) -> BlockTypeTransition:
    return BlockTypeTransition(blocks)


@pytest.fixture
def provider(member) -> StaticIdentityProvider:
    return StaticIdentityProvider(member)


@pytest.fixture
def service(store, provider, config, ids, admin, member, outsider) -> WorkspaceService:
    users = UserDirectory([admin, member, outsider], id_generator=ids)
    ids.advance_past("user-3")
    return WorkspaceService(store, provider, config, users=users, id_generator=ids)
