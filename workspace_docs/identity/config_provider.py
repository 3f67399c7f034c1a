"""
Config file identity provider.

Reads the user roster and the signed-in user from a local YAML file.
"""

import logging
from pathlib import Path
from typing import Any

import yaml

from ..exceptions import AuthenticationRequiredError
from .directory import UserDirectory
from .provider import IdentityProvider
from .types import UserIdentity

logger = logging.getLogger(__name__)


class ConfigFileIdentityProvider(IdentityProvider):
    """Identity provider that reads from local config.

    Configuration in the workspace settings file:

    ```yaml
    identity:
      user_id: "user-2"
    users:
      - user_id: "user-1"
        display_name: "Admin Rey"
        role: "admin"
      - user_id: "user-2"
        display_name: "User Bob"
        role: "member"
    ```

    The listed users are registered in the directory; the identity
    section names which of them is acting.
    """

    def __init__(self, config_path: Path, directory: UserDirectory | None = None):
        """Initialize the config file provider.

        Args:
            config_path: Path to the settings YAML file
            directory: Directory to register users into (a fresh one if omitted)
        """
        self.config_path = config_path
        self.directory = directory or UserDirectory()
        self._identity: UserIdentity | None = None
        self._signed_out = False
        self._load_users()

    def get_current_identity(self) -> UserIdentity:
        """Get the signed-in user named by the identity section.

        Returns cached identity if available, otherwise resolves it from
        config.
        """
        if self._identity is not None:
            return self._identity
        if self._signed_out:
            raise AuthenticationRequiredError()

        identity_config = self._load_config().get("identity") or {}
        user_id = identity_config.get("user_id")
        if not user_id:
            raise AuthenticationRequiredError("No identity.user_id configured")

        user = self.directory.get(user_id)
        if user is None:
            raise AuthenticationRequiredError(f"Configured user {user_id} is not in users list")

        self._identity = user
        return self._identity

    def sign_out(self) -> None:
        """Clear cached identity.

        Stays signed out until sign_in() is called. The config file is
        not modified.
        """
        self._identity = None
        self._signed_out = True

    def sign_in(self, user_id: str | None = None) -> UserIdentity:
        """Sign in again after sign_out().

        Args:
            user_id: User to act as; when omitted, the identity section of
                the config file is read again.

        Raises:
            AuthenticationRequiredError: If the user is not in the directory
        """
        self._identity = None
        self._signed_out = False
        if user_id is None:
            return self.get_current_identity()

        user = self.directory.get(user_id)
        if user is None:
            raise AuthenticationRequiredError(f"Unknown user: {user_id}")
        self._identity = user
        return user

    def _load_users(self) -> None:
        for entry in self._load_config().get("users") or []:
            user = UserIdentity.from_dict(entry)
            if user.user_id in self.directory:
                logger.debug(f"User {user.user_id} already registered, skipping")
                continue
            self.directory.register(user)

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            return {}

        try:
            content = self.config_path.read_text()
            return yaml.safe_load(content) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Could not parse {self.config_path}: {e}")
            return {}
