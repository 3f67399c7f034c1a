"""
Identity provider abstract interface.

Defines the contract for resolving the current actor.
"""

from abc import ABC, abstractmethod

from ..exceptions import AuthenticationRequiredError
from .types import UserIdentity


class IdentityProvider(ABC):
    """Abstract identity provider.

    The workspace core never looks up "the current user" itself; the
    service facade asks a provider and threads the result through every
    command as the acting user.
    """

    @abstractmethod
    def get_current_identity(self) -> UserIdentity:
        """Get the current user identity.

        Raises:
            AuthenticationRequiredError: If no user is signed in
        """
        ...

    @abstractmethod
    def sign_out(self) -> None:
        """Clear the current identity.

        After sign out, get_current_identity() raises
        AuthenticationRequiredError.
        """
        ...

    def current_or_none(self) -> UserIdentity | None:
        """Current identity, or None when nobody is signed in."""
        try:
            return self.get_current_identity()
        except AuthenticationRequiredError:
            return None


class StaticIdentityProvider(IdentityProvider):
    """Provider holding a fixed identity (embedding, scripts, tests)."""

    def __init__(self, identity: UserIdentity | None = None):
        self._identity = identity

    def get_current_identity(self) -> UserIdentity:
        if self._identity is None:
            raise AuthenticationRequiredError()
        return self._identity

    def sign_in(self, identity: UserIdentity) -> None:
        """Switch the acting user."""
        self._identity = identity

    def sign_out(self) -> None:
        self._identity = None
