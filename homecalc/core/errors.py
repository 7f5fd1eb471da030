"""Error Hierarchy: typed, categorized exceptions for every AI flow failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() always carries the same generic user-facing message; the code
      tells the failure kinds apart for logs and clients that care
    - No internal details (model output, stack traces) leak into responses

Design Decisions:
    - Single hierarchy with HomeCalcError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

GENERIC_FAILURE_MESSAGE = "We couldn't complete that request. Please try again."


class ErrorSeverity(str, Enum):
    """How loudly a failure is logged; echoed in the envelope."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Which boundary the failure came from."""
    VALIDATION = "validation"
    EXTERNAL_API = "external_api"
    MODEL_OUTPUT = "model_output"
    TOOL = "tool"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the REST envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    flow: str | None = None
    tool_name: str | None = None
    round_number: int | None = None
    field: str | None = None
    user_message: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class HomeCalcError(Exception):
    """Base exception for all HomeCalc AI errors."""

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

    def log_fields(self) -> dict:
        """extra= payload for the structured log line of this failure."""
        fields = {
            "flow": self.context.flow,
            "error_code": self.code,
            "tool_name": self.context.tool_name,
            "round_number": self.context.round_number,
        }
        return {k: v for k, v in fields.items() if v is not None}

    def to_response(self) -> dict:
        """Convert to the standardized REST error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or GENERIC_FAILURE_MESSAGE,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "flow": self.context.flow,
                    "tool_name": self.context.tool_name,
                    "field": self.context.field,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Caller errors (400-level) ──────────────────────────────────

class RequestValidationError(HomeCalcError):
    """Caller input failed its declared schema. No model call is attempted."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "REQUEST_VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


# ─── Upstream errors (500-level) ────────────────────────────────

class ModelInvocationError(HomeCalcError):
    """Model request failed: transport, timeout, or round-trip limit."""
    def __init__(
        self,
        message: str,
        reason: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        category = (
            ErrorCategory.TIMEOUT if reason == "timeout"
            else ErrorCategory.EXTERNAL_API
        )
        super().__init__(
            f"Model invocation failed ({reason}): {message}",
            "MODEL_INVOCATION_ERROR", category,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.reason = reason


class ResponseValidationError(HomeCalcError):
    """Model output did not conform to the declared output schema."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field = field
        super().__init__(
            message, "RESPONSE_VALIDATION_ERROR", ErrorCategory.MODEL_OUTPUT,
            ErrorSeverity.ERROR, ctx, 502,
        )
        self.field = field


class ToolInvocationError(HomeCalcError):
    """A declared tool failed, timed out, or received/returned malformed data."""
    def __init__(
        self,
        message: str,
        tool_name: str,
        reason: str,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.tool_name = tool_name
        super().__init__(
            f"Tool '{tool_name}' failed ({reason}): {message}",
            "TOOL_INVOCATION_ERROR", ErrorCategory.TOOL,
            ErrorSeverity.ERROR, ctx, 502,
        )
        self.tool_name = tool_name
        self.reason = reason
