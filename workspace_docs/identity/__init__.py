"""
Identity management for the workspace.

Provides the acting-user type, a user directory, and providers
that resolve who is currently issuing commands.
"""

from .types import UserIdentity, UserRole
from .provider import IdentityProvider, StaticIdentityProvider
from .directory import UserDirectory
from .config_provider import ConfigFileIdentityProvider

__all__ = [
    # Types
    "UserIdentity",
    "UserRole",
    # Providers
    "IdentityProvider",
    "StaticIdentityProvider",
    "ConfigFileIdentityProvider",
    # Directory
    "UserDirectory",
]
