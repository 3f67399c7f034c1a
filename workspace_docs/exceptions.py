"""
Custom exceptions for the workspace document model.

Commands report denial, missing entities and validation failures through
CommandResult; these exceptions are raised when a caller unwraps a
result, and are shared by every component for consistent error handling.
"""


class WorkspaceError(Exception):
    """Base exception for all workspace errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EntityNotFoundError(WorkspaceError):
    """Raised when a referenced page, block or template does not exist."""

    kind = "entity"

    def __init__(self, entity_id: str):
        super().__init__(
            f"{self.kind.capitalize()} not found: {entity_id}",
            {"kind": self.kind, "entity_id": entity_id},
        )
        self.entity_id = entity_id


class PageNotFoundError(EntityNotFoundError):
    """Raised when a page is not found."""

    kind = "page"


class BlockNotFoundError(EntityNotFoundError):
    """Raised when a block is not found."""

    kind = "block"


class TemplateNotFoundError(EntityNotFoundError):
    """Raised when a template is not found."""

    kind = "template"


class PermissionDeniedError(WorkspaceError):
    """User does not have permission for the requested operation."""

    def __init__(self, user_id: str | None, page_id: str | None, reason: str):
        details = {"user_id": user_id, "page_id": page_id, "reason": reason}
        target = f"page {page_id}" if page_id else "workspace"
        super().__init__(
            f"Permission denied for user {user_id} on {target}: {reason}",
            details,
        )
        self.user_id = user_id
        self.page_id = page_id
        self.reason = reason


class ValidationError(WorkspaceError):
    """Raised when data validation fails."""

    def __init__(self, field: str, reason: str, value: str | None = None):
        details = {"field": field, "reason": reason}
        if value is not None:
            details["value"] = value
        super().__init__(f"Validation failed for {field}: {reason}", details)
        self.field = field
        self.reason = reason
        self.value = value


class AuthenticationRequiredError(WorkspaceError):
    """Raised when an operation needs a current user but none is signed in."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)
