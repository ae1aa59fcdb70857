"""Error Hierarchy — typed, categorized exceptions for all lifegraph failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are not retried; storage errors (503) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with LifeGraphError base: FastAPI global handler catches all
    - The service returns outcomes (core/outcomes.py); routes raise these errors
      to reach the global handler. Only StorageError is raised below the routes
    - ErrorContext as dataclass: observability fields without coupling to logging
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
    STORAGE = "storage"
    INTERNAL = "internal"
    TIMEOUT = "timeout"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    board_id: str | None = None
    steps: int | None = None
    iterations: int | None = None
    debug_info: dict[str, Any] | None = None


class LifeGraphError(Exception):
    """Base exception for all lifegraph errors."""

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
                    "board_id": self.context.board_id,
                    "steps": self.context.steps,
                    "iterations": self.context.iterations,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class BoardValidationError(LifeGraphError):
    """Board size, cell coordinates or step count rejected."""
    def __init__(
        self,
        message: str,
        field: str,
        offending_cells: list | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field
        self.offending_cells = offending_cells or []

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [{
            "field": self.field,
            "message": self.message,
            "offending_cells": [list(c) for c in self.offending_cells],
        }]
        return response


class BoardNotFoundError(LifeGraphError):
    """Referenced board id is unknown to storage."""
    def __init__(self, board_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.board_id = board_id
        super().__init__(
            f"Board '{board_id}' not found",
            "BOARD_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


class StabilityError(LifeGraphError):
    """Final-state search ended in oscillation or ran out of iterations."""
    def __init__(
        self, message: str, reason: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "BOARD_UNSTABLE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.INFO, context, 422,
        )
        self.reason = reason

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["reason"] = self.reason
        return response


class FinalStateTimeoutError(LifeGraphError):
    """Final-state search exceeded the request time budget."""
    def __init__(self, timeout_seconds: float, context: ErrorContext | None = None):
        super().__init__(
            f"Final state search exceeded {timeout_seconds}s",
            "FINAL_STATE_TIMEOUT", ErrorCategory.TIMEOUT,
            ErrorSeverity.WARNING, context, 504,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(LifeGraphError):
    """Storage backend unavailable or operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
