"""
Page hierarchy.

Pages form a forest keyed by parent_id; each owns a tree of blocks.
"""

from .types import (
    DEFAULT_TEMPLATES,
    Page,
    Template,
    TemplateKind,
    Workspace,
)
from .tree import PageTree

__all__ = [
    "Page",
    "PageTree",
    "Template",
    "TemplateKind",
    "Workspace",
    "DEFAULT_TEMPLATES",
]
