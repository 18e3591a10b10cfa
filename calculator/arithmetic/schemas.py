"""Pydantic schemas for calculator requests, results and errors."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Format a datetime as ISO-8601 UTC with millisecond precision.

    Args:
        value: Timezone-aware datetime.

    Returns:
        A string such as ``2024-05-01T12:00:00.000Z``.
    """
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ErrorCode(str, Enum):
    """Machine-readable codes for rejected operations."""

    missing_parameter = "MISSING_PARAMETER"
    not_a_number = "NOT_A_NUMBER"
    division_by_zero = "DIVISION_BY_ZERO"
    modulo_by_zero = "MODULO_BY_ZERO"
    negative_radicand = "NEGATIVE_RADICAND"
    non_finite_result = "NON_FINITE_RESULT"


class OperationRequest(BaseModel):
    """A validated operation ready to be computed.

    Attributes:
        operation: Operation name (e.g. "add").
        operands: Parsed operands keyed by parameter name, in declared order.
        received: Raw query values, echoed back on domain errors.
    """

    model_config = ConfigDict(frozen=True)

    operation: str
    operands: dict[str, float]
    received: dict[str, str | None] = Field(default_factory=dict)


class OperationResult(BaseModel):
    """Successful computation.

    Attributes:
        operation: Operation name.
        operands: Operands keyed by the parameter names of the operation.
        result: Numeric result.
        timestamp: When the result was produced.
    """

    model_config = ConfigDict(frozen=True)

    operation: str
    operands: dict[str, float]
    result: float
    timestamp: datetime = Field(default_factory=utcnow)

    def to_payload(self) -> dict[str, Any]:
        """Render the response body with operation-specific field names."""
        return {
            "operation": self.operation,
            **self.operands,
            "result": self.result,
            "timestamp": format_timestamp(self.timestamp),
        }


class OperationError(BaseModel):
    """Rejected computation.

    Attributes:
        code: Error code.
        message: Human-readable explanation.
        received: Raw query values of the operation's parameters.
        example: Example of a valid request, when one helps the caller.
    """

    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str
    received: dict[str, str | None] = Field(default_factory=dict)
    example: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "error": self.code.value,
            "message": self.message,
            "received": self.received,
        }
        if self.example is not None:
            payload["example"] = self.example
        return payload


class ErrorResponse(BaseModel):
    """API error body shared by all endpoints."""

    error: str = Field(..., description="Machine-readable error code")
    message: str | None = Field(default=None, description="Human-readable message")
    received: dict[str, str | None] | None = Field(
        default=None, description="Raw inputs received with the request"
    )
    example: str | None = Field(default=None, description="Example of a valid request")
