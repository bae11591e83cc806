"""Exception hierarchy for DeckVault.

Every failure the service layer can report is one of these classes. The
exception handler in ``middleware.exception_handler`` turns them into JSON
responses, so services raise and never build HTTP responses themselves.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Machine-readable error codes returned in API responses."""

    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"

    NOT_FOUND = "NOT_FOUND"

    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    NO_DRAFT = "NO_DRAFT"

    SEARCH_UNAVAILABLE = "SEARCH_UNAVAILABLE"

    DATA_INTEGRITY = "DATA_INTEGRITY"

    RATE_LIMITED = "RATE_LIMITED"


class DeckVaultError(Exception):
    """
    Base exception for all DeckVault errors.

    Carries a human-readable message, a machine-readable code, the HTTP
    status to answer with, and optional structured details.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for a JSON error response."""
        return {
            "error": self.message,
            "code": self.error_code.value,
            "details": self.details,
        }


class AuthenticationError(DeckVaultError):
    """No caller identity was supplied (or it could not be verified)."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message,
            ErrorCode.UNAUTHENTICATED,
            status_code=401,
        )


class ForbiddenError(DeckVaultError):
    """Caller is identified but lacks the role the operation requires."""

    def __init__(self, message: str = "You do not have permission to perform this action"):
        super().__init__(
            message,
            ErrorCode.FORBIDDEN,
            status_code=403,
        )


class NotFoundError(DeckVaultError):
    """Organization, folder, presentation or slide is absent or soft-deleted."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            f"{resource.capitalize()} not found: {identifier}",
            ErrorCode.NOT_FOUND,
            status_code=404,
            details={"resource": resource, "id": identifier}
        )


class ConflictError(DeckVaultError):
    """Write collides with existing state (e.g. duplicate sibling name)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, status_code: int = 409):
        super().__init__(
            message,
            ErrorCode.CONFLICT,
            status_code=status_code,
            details=details
        )


class DuplicateOrderError(ConflictError):
    """Reorder payload repeats an ``order`` value.

    Answered with 400 because the reorder endpoint rejects malformed
    payloads uniformly.
    """

    def __init__(self, order: int):
        super().__init__(
            "Duplicate order values",
            details={"order": order},
            status_code=400,
        )


class ValidationError(DeckVaultError):
    """Input failed validation (name pattern, empty field, too many tags)."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class NoDraftError(DeckVaultError):
    """Publish or discard was requested for a slide with nothing pending."""

    def __init__(self, slide_id: str, action: str):
        super().__init__(
            f"No draft to {action}",
            ErrorCode.NO_DRAFT,
            status_code=400,
            details={"slide_id": slide_id}
        )


class SearchUnavailableError(DeckVaultError):
    """Search engine is unreachable, unhealthy or not configured."""

    def __init__(self, message: str = "Search service unavailable", reason: Optional[str] = None):
        details = {"reason": reason} if reason else {}
        super().__init__(
            message,
            ErrorCode.SEARCH_UNAVAILABLE,
            status_code=503,
            details=details
        )


class DataIntegrityError(DeckVaultError):
    """Stored data violates a structural invariant (cyclic or dangling parent graph)."""

    def __init__(self, message: str, folder_id: Optional[str] = None):
        details = {"folder_id": folder_id} if folder_id else {}
        super().__init__(
            message,
            ErrorCode.DATA_INTEGRITY,
            status_code=500,
            details=details
        )
