"""Access control module for page editing."""

from .controller import AccessPolicy
from .permissions import AccessDecision, Permission

__all__ = ["AccessPolicy", "AccessDecision", "Permission"]
