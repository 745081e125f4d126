"""Error Hierarchy — typed, categorized exceptions for all scouting API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the {status, message, error} REST envelope

Design Decisions:
    - Single hierarchy with ScoutingError base: one global handler catches all
    - details is a free-form dict surfaced under error.details when present
"""

from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    PERMISSION = "permission"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    CONFIGURATION = "configuration"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


class ScoutingError(Exception):
    """Base exception for all scouting API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.details = details

    def to_response(self) -> dict:
        """Convert to standardized REST error envelope."""
        error: dict[str, Any] = {
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
        }
        if self.details:
            error["details"] = self.details
        return {"status": "error", "message": self.message, "error": error}


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestValidationFailed(ScoutingError):
    """Input failed a check the request schema cannot express."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, 400,
            {"field": field} if field else None,
        )
        self.field = field


class AuthenticationError(ScoutingError):
    """Caller could not be identified."""
    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class PermissionDeniedError(ScoutingError):
    """Caller is identified but not allowed to perform the action."""
    def __init__(self, message: str = "You are not allowed to perform this action"):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.PERMISSION,
            ErrorSeverity.WARNING, 403,
        )


class InsufficientCreditsError(ScoutingError):
    """Non-pro user tried to request an analysis with no credits left."""
    def __init__(self, credits: int):
        super().__init__(
            "You do not have enough credits.",
            "INSUFFICIENT_CREDITS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, 403,
            {"credits": credits},
        )
        self.credits = credits


class ResourceNotFoundError(ScoutingError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: str | None = None):
        message = (
            f"{resource_type} '{resource_id}' not found"
            if resource_id is not None else f"{resource_type} not found"
        )
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(ScoutingError):
    """Resource already exists or is in a conflicting state."""
    def __init__(self, message: str):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(ScoutingError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 503,
        )
        self.operation = operation


class ConfigurationError(ScoutingError):
    """Required configuration is missing or malformed."""
    def __init__(self, message: str):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, 500,
        )


class IdentityProviderError(ScoutingError):
    """Token verification backend (Firebase) is unreachable."""
    def __init__(self, message: str):
        super().__init__(
            f"Identity provider error: {message}",
            "IDENTITY_PROVIDER_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, 503,
        )


class StatisticsSourceError(ScoutingError):
    """Legacy statistics table could not be located."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message, "STATISTICS_SOURCE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500, details,
        )


class QueryTimeoutError(ScoutingError):
    """A query did not finish within its time budget."""
    def __init__(self, operation: str, timeout_seconds: float):
        super().__init__(
            f"{operation} timed out after {timeout_seconds:g}s",
            "QUERY_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.ERROR, 504,
        )
        self.timeout_seconds = timeout_seconds
