"""Arithmetic module - operand validation, operations and endpoints."""

from .schemas import (
    ErrorCode,
    ErrorResponse,
    OperationError,
    OperationRequest,
    OperationResult,
)
from .exceptions import (
    CalculatorError,
    OperandError,
    MissingParameterError,
    NotANumberError,
    DivisionByZeroError,
    ModuloByZeroError,
    NegativeRadicandError,
    NonFiniteResultError,
)
from .operations import OPERATIONS, Operation, get_operation
from .service import evaluate
from .router import router


__all__ = [
    # Schemas
    "ErrorCode",
    "ErrorResponse",
    "OperationError",
    "OperationRequest",
    "OperationResult",
    # Exceptions
    "CalculatorError",
    "OperandError",
    "MissingParameterError",
    "NotANumberError",
    "DivisionByZeroError",
    "ModuloByZeroError",
    "NegativeRadicandError",
    "NonFiniteResultError",
    # Operations
    "OPERATIONS",
    "Operation",
    "get_operation",
    # Service
    "evaluate",
    # Router
    "router",
]
