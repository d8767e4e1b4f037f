"""Error Hierarchy — typed, categorized exceptions for all Ruliad failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (400-level) are recoverable; contract violations (500-level) are critical
    - to_response() produces the REST envelope
    - Empty analysis results (no rewrite, no dependency, no cycle) are NEVER errors

Design Decisions:
    - Single hierarchy with RuliadError base: FastAPI global handler catches all
    - ContractViolationError marks programmer errors: the core fails fast, callers
      are expected to validate before invoking it
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
    CONTRACT_VIOLATION = "contract_violation"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    component: str | None = None
    clause_id: str | None = None
    debug_info: dict[str, Any] | None = None


class RuliadError(Exception):
    """Base exception for all Ruliad errors."""

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
                    "component": self.context.component,
                    "clause_id": self.context.clause_id,
                },
            }
        }


# ─── Validation Errors (400-level) ──────────────────────────────

class ClauseValidationError(RuliadError):
    """Clause input rejected at the system boundary."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


# ─── Contract Violations (500-level) ────────────────────────────

class ContractViolationError(RuliadError):
    """A core component was invoked with input the caller must never send."""
    def __init__(self, message: str, component: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.component = component
        super().__init__(
            f"Contract violation in {component}: {message}",
            "CONTRACT_VIOLATION", ErrorCategory.CONTRACT_VIOLATION,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.component = component
