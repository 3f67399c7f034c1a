"""Typed outcomes for workspace commands.

Every command reports what happened instead of returning a bare
boolean or None, so a denied write and a write against a missing
entity can be told apart:

    result = pages.update_page_title(actor, "page-3", "Roadmap")
    if result.outcome is Outcome.DENIED:
        ...
    page = result.unwrap()  # raises on anything but APPLIED
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from .exceptions import (
    BlockNotFoundError,
    EntityNotFoundError,
    PageNotFoundError,
    PermissionDeniedError,
    TemplateNotFoundError,
    ValidationError,
)

T = TypeVar("T")

_NOT_FOUND_ERRORS: dict[str, type[EntityNotFoundError]] = {
    "page": PageNotFoundError,
    "block": BlockNotFoundError,
    "template": TemplateNotFoundError,
}


class Outcome(Enum):
    """What a command did."""

    APPLIED = "applied"
    DENIED = "denied"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass(frozen=True)
class CommandResult(Generic[T]):
    """Result of a workspace command.

    Attributes:
        outcome: Applied, denied, not found or invalid
        entity: The affected entity (only when applied)
        reason: Machine-readable reason for anything but APPLIED
        details: Extra context (ids, field names) for callers and logs
    """

    outcome: Outcome
    entity: T | None = None
    reason: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def applied(cls, entity: T | None = None) -> CommandResult[T]:
        return cls(Outcome.APPLIED, entity=entity)

    @classmethod
    def denied(
        cls, reason: str, user_id: str | None = None, page_id: str | None = None
    ) -> CommandResult[T]:
        return cls(
            Outcome.DENIED,
            reason=reason,
            details={"user_id": user_id, "page_id": page_id},
        )

    @classmethod
    def not_found(cls, kind: str, entity_id: str) -> CommandResult[T]:
        return cls(
            Outcome.NOT_FOUND,
            reason=f"{kind}_not_found",
            details={"kind": kind, "entity_id": entity_id},
        )

    @classmethod
    def invalid(
        cls, field_name: str, reason: str, value: str | None = None
    ) -> CommandResult[T]:
        return cls(
            Outcome.INVALID,
            reason=reason,
            details={"field": field_name, "value": value},
        )

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.APPLIED

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T | None:
        """Return the entity, or raise the exception matching the outcome.

        Raises:
            PermissionDeniedError: If the command was denied
            EntityNotFoundError: If a referenced entity was missing
            ValidationError: If the input was rejected
        """
        if self.outcome is Outcome.APPLIED:
            return self.entity
        if self.outcome is Outcome.DENIED:
            raise PermissionDeniedError(
                self.details.get("user_id"),
                self.details.get("page_id"),
                self.reason or "denied",
            )
        if self.outcome is Outcome.NOT_FOUND:
            error_type = _NOT_FOUND_ERRORS.get(self.details.get("kind", ""), EntityNotFoundError)
            raise error_type(self.details.get("entity_id", ""))
        raise ValidationError(
            self.details.get("field", "unknown"),
            self.reason or "invalid",
            self.details.get("value"),
        )
