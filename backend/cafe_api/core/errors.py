"""Error Hierarchy - typed, categorized exceptions for every Cafe API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation errors (422) are user-correctable; anything else is a 500
    - CafeValidationError.to_response() is exactly {"error": {field: [messages]}}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with CafeApiError base: one global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: observability data without coupling to the logging setup
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
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    title: str | None = None
    address: str | None = None
    debug_info: dict[str, Any] | None = None


class CafeApiError(Exception):
    """Base exception for all Cafe API errors."""

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
            }
        }


# --- Domain Errors (4xx) -----------------------------------------------------

class CafeValidationError(CafeApiError):
    """Cafe failed presence or uniqueness validation.

    ``errors`` maps field name to the list of violation messages, e.g.
    ``{"title": ["can't be blank"]}``.
    """
    def __init__(
        self, errors: dict[str, list[str]], context: ErrorContext | None = None,
    ):
        super().__init__(
            f"Cafe is invalid: {_summarize(errors)}",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 422,
        )
        self.errors = errors

    def to_response(self) -> dict:
        return {"error": self.errors}


def _summarize(errors: dict[str, list[str]]) -> str:
    """Render errors as "Title can't be blank, Address can't be blank"."""
    return ", ".join(
        f"{name.capitalize()} {msg}"
        for name, messages in errors.items()
        for msg in messages
    )
