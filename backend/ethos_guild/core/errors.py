"""Error Hierarchy — typed, categorized exceptions for all commerce failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are surfaced to the caller, never retried internally
    - External/infrastructure errors (500-level) never leak internal details
    - to_response() produces the REST envelope used by every error handler

Design Decisions:
    - Single hierarchy with GuildError base: FastAPI global handler catches all
    - BusinessRuleError subclasses (SoldOutError, TicketAlreadyUsedError) keep the category
      but give callers a stable code to branch on
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
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    actor_id: str | None = None
    resource_type: str | None = None
    resource_id: str | None = None
    debug_info: dict[str, Any] | None = None


class GuildError(Exception):
    """Base exception for all commerce core errors."""

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
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "resource_type": self.context.resource_type,
                    "resource_id": self.context.resource_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class InputValidationError(GuildError):
    """Request data is missing or out of range."""
    def __init__(
        self, message: str, field: str | None = None, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class AuthenticationRequiredError(GuildError):
    """No valid bearer credential was presented."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized", "AUTHENTICATION_REQUIRED",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(GuildError):
    """Caller lacks ownership, collaborator or age-verification rights."""
    def __init__(self, message: str = "Forbidden", context: ErrorContext | None = None):
        super().__init__(
            message, "PERMISSION_DENIED", ErrorCategory.PERMISSION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(GuildError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.resource_type = resource_type
        ctx.resource_id = resource_id
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class SlugConflictError(GuildError):
    """QR slug already registered to an artifact, event or venue."""
    def __init__(self, slug: str, context: ErrorContext | None = None):
        super().__init__(
            "QR slug already in use", "QR_SLUG_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.slug = slug


class BusinessRuleError(GuildError):
    """A commerce rule rejected an otherwise well-formed request."""
    def __init__(
        self,
        message: str,
        code: str = "BUSINESS_RULE_VIOLATION",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )


class SoldOutError(BusinessRuleError):
    """Remaining supply or ticket capacity cannot cover the requested quantity."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "SOLD_OUT", context)


class TicketAlreadyUsedError(BusinessRuleError):
    """Ticket was already redeemed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Ticket already used", "TICKET_ALREADY_USED", context)


# ─── External / Infrastructure Errors (500-level) ───────────────

class PaymentGatewayError(GuildError):
    """Payment gateway call failed or timed out."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Payment gateway error: {message}",
            "PAYMENT_GATEWAY_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 502,
        )


class ReceiptNotaryError(GuildError):
    """Settlement receipt notification failed."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Receipt notary error: {message}",
            "RECEIPT_NOTARY_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, context, 502,
        )


class DatabaseError(GuildError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
