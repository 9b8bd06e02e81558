"""Error Hierarchy — typed, categorized exceptions for all CogniCare failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) carry the user-facing Spanish message verbatim
    - to_response() produces the REST envelope {"success": false, "message", "error"}
    - Driver details (SQLSTATE, constraint detail) travel on DatabaseError, never in the envelope

Design Decisions:
    - Single hierarchy with CogniCareError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


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
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    user_id: str | None = None
    debug_info: dict[str, Any] | None = None


class CogniCareError(Exception):
    """Base exception for all CogniCare errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "success": False,
            "message": self.message,
            "error": {
                "code": self.code,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            },
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class RequestDataError(CogniCareError):
    """Request input is missing or malformed."""
    def __init__(self, message: str, field: str | None = None, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class BusinessRuleError(CogniCareError):
    """A stored function rejected the operation with a controlled message."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "BUSINESS_RULE_VIOLATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, context, 400,
        )


class AuthenticationError(CogniCareError):
    """Missing, invalid or expired credentials."""
    def __init__(self, message: str = "No autorizado.", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(CogniCareError):
    """Authenticated user lacks the role required by the route."""
    def __init__(
        self, message: str = "No tiene permisos para realizar esta acción.",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "PERMISSION_DENIED", ErrorCategory.PERMISSION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(CogniCareError):
    """Requested resource does not exist."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )


class ConflictError(CogniCareError):
    """Uniqueness or state conflict reported by the database."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class UnexpectedResultError(CogniCareError):
    """Database call succeeded but returned nothing usable."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "UNEXPECTED_RESULT", ErrorCategory.INTERNAL,
            ErrorSeverity.ERROR, context, 500,
        )


class DatabaseError(CogniCareError):
    """Database operation failed.

    ``sqlstate`` and ``detail`` come from the PostgreSQL driver so the
    service layer can map unique/foreign-key violations and RAISE EXCEPTION
    messages to client errors.
    """
    def __init__(
        self,
        message: str,
        operation: str,
        sqlstate: str | None = None,
        detail: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation
        self.sqlstate = sqlstate
        self.detail = detail


class DatabaseUnavailableError(CogniCareError):
    """Connection or pool failure."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DATABASE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
