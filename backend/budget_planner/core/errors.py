"""Error Hierarchy — typed, categorized exceptions for all Budget Planner failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope consumed by the global handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BudgetPlannerError base: FastAPI global handler catches all
    - ErrorContext as dataclass: carries budget/expense ids without coupling to logging
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
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    budget_id: str | None = None
    expense_id: str | None = None
    month: str | None = None
    debug_info: dict[str, Any] | None = None


class BudgetPlannerError(Exception):
    """Base exception for all Budget Planner errors."""

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
                    "budget_id": self.context.budget_id,
                    "expense_id": self.context.expense_id,
                    "month": self.context.month,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class BudgetValidationError(BudgetPlannerError):
    """Input is missing required fields or is malformed."""
    def __init__(
        self, message: str, fields: list[str], context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.fields = fields


class DuplicateMonthError(BudgetPlannerError):
    """Another budget already covers the requested month."""
    def __init__(self, month: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.month = month
        super().__init__(
            f"A budget for {month} already exists",
            "DUPLICATE_MONTH", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.month = month


class ResourceNotFoundError(BudgetPlannerError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConcurrencyError(BudgetPlannerError):
    """Concurrent modification kept winning the optimistic write."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreUnavailableError(BudgetPlannerError):
    """Persistent store unreachable or the operation failed in the driver."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_UNAVAILABLE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
