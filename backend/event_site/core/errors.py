"""Error Hierarchy — typed, categorized exceptions for all event-site failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope with a top-level human-readable message
    - No internal details (credentials, stack traces) leaked in user-facing messages

Design Decisions:
    - Single hierarchy with EventSiteError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Top-level "message" duplicated outside the envelope: storefront clients read it directly
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
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    order_id: int | None = None
    gift_id: int | None = None
    payment_id: str | None = None
    debug_info: dict[str, Any] | None = None


class EventSiteError(Exception):
    """Base exception for all event-site errors."""

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
            "message": self.message,
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "order_id": self.context.order_id,
                    "gift_id": self.context.gift_id,
                    "payment_id": self.context.payment_id,
                },
            },
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class RequestValidationFailedError(EventSiteError):
    """Required field missing or malformed after boundary parsing."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class GiftUnavailableError(EventSiteError):
    """Gift exists but has no stock left."""
    def __init__(self, gift_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.gift_id = gift_id
        super().__init__(
            "This gift is no longer available",
            "GIFT_UNAVAILABLE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.gift_id = gift_id


class ResourceNotFoundError(EventSiteError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


class UnauthorizedError(EventSiteError):
    """Credential missing or rejected outright."""
    def __init__(
        self,
        message: str = "Authentication token not provided",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ForbiddenError(EventSiteError):
    """Credential present but invalid or expired."""
    def __init__(
        self,
        message: str = "Invalid or expired token",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 403,
        )


class InvalidSignatureError(EventSiteError):
    """Webhook body failed HMAC verification."""
    def __init__(self, message: str = "Invalid signature", context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_SIGNATURE", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(EventSiteError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class UpstreamFailureError(EventSiteError):
    """Payment gateway call failed or gateway is not configured."""
    def __init__(
        self,
        message: str,
        operation: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Payment gateway error ({operation}): {message}",
            "UPSTREAM_FAILURE", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
