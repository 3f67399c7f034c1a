"""User directory: the known actors of a workspace."""

from __future__ import annotations

import logging

from ..access import AccessPolicy
from ..id_utils import IdGenerator, TimestampIdGenerator
from ..results import CommandResult
from .types import UserIdentity, UserRole

logger = logging.getLogger(__name__)


class UserDirectory:
    """In-memory registry of users, in registration order.

    Used to resolve access-list entries to display names and to let
    admins register new members.
    """

    def __init__(
        self,
        users: list[UserIdentity] | None = None,
        policy: AccessPolicy | None = None,
        id_generator: IdGenerator | None = None,
    ):
        self._users: dict[str, UserIdentity] = {}
        self.policy = policy or AccessPolicy()
        self.id_generator = id_generator or TimestampIdGenerator()
        for user in users or []:
            self.register(user)

    def register(self, user: UserIdentity) -> UserIdentity:
        """Add a user without an access check (bootstrap/config loading)."""
        if user.user_id in self._users:
            raise ValueError(f"Duplicate user id: {user.user_id}")
        self._users[user.user_id] = user
        return user

    def get(self, user_id: str) -> UserIdentity | None:
        return self._users.get(user_id)

    def list_users(self) -> list[UserIdentity]:
        return list(self._users.values())

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._users

    def __len__(self) -> int:
        return len(self._users)

    def add_user(
        self,
        actor: UserIdentity | None,
        display_name: str,
        role: UserRole | str = UserRole.MEMBER,
    ) -> CommandResult[UserIdentity]:
        """Register a new user. Admin only.

        Args:
            actor: User issuing the command
            display_name: Name shown in access lists; must not be blank
            role: Role of the new user

        Returns:
            CommandResult with the created user when applied
        """
        decision = self.policy.check_admin(actor)
        if not decision.allowed:
            return CommandResult.denied(decision.reason, user_id=_actor_id(actor))

        name = display_name.strip()
        if not name:
            return CommandResult.invalid("display_name", "must not be blank")
        try:
            parsed_role = UserRole.parse(role)
        except ValueError:
            return CommandResult.invalid("role", "unknown role", str(role))

        user_id = self.id_generator.new_id("user")
        while user_id in self._users:
            user_id = self.id_generator.new_id("user")

        user = self.register(
            UserIdentity(user_id=user_id, display_name=name, role=parsed_role)
        )
        logger.info(f"User {user.user_id} added by {_actor_id(actor)}")
        return CommandResult.applied(user)


def _actor_id(actor: UserIdentity | None) -> str | None:
    return actor.user_id if actor else None
