"""Service layer for arithmetic operations."""

import math
from typing import Mapping, Union

from structlog.stdlib import BoundLogger

from .exceptions import NonFiniteResultError, OperandError
from .operations import Operation
from .schemas import OperationError, OperationRequest, OperationResult
from .validation import validate_operands

Outcome = Union[OperationResult, OperationError]


def compute(operation: Operation, request: OperationRequest) -> OperationResult:
    """Apply an operation to already validated operands.

    Args:
        operation: Operation to apply.
        request: Validated request.

    Returns:
        OperationResult with the computed value.

    Raises:
        OperandError: If the operands are outside the operation's domain or
            the result is not finite.
    """
    result = operation.compute(*request.operands.values())
    if not math.isfinite(result):
        raise NonFiniteResultError(operation.name)
    return OperationResult(
        operation=operation.name,
        operands=request.operands,
        result=result,
    )


def evaluate(
    operation: Operation,
    query: Mapping[str, str],
    logger: BoundLogger,
) -> Outcome:
    """Validate a request and compute its result.

    Domain errors are returned as OperationError values. Anything else
    propagates to the application's 500 handler.

    Args:
        operation: Operation to apply.
        query: Request query parameters.
        logger: Event logger for this request.

    Returns:
        Exactly one of OperationResult or OperationError.
    """
    request: OperationRequest | None = None
    try:
        request = validate_operands(operation, query)
        outcome: Outcome = compute(operation, request)
    except OperandError as exc:
        received = request.received if request is not None else None
        outcome = exc.to_error(received=received)
        logger.error(
            "operation_rejected",
            operation=operation.name,
            error_code=outcome.code.value,
            reason=outcome.message,
            received=outcome.received,
        )
        return outcome

    logger.info(
        "operation_succeeded",
        operation=operation.name,
        **request.operands,
        result=outcome.result,
    )
    return outcome
