"""Query parameter validation for arithmetic operations."""

import math
from typing import Mapping

from .exceptions import MissingParameterError, NotANumberError
from .operations import Operation
from .schemas import OperationRequest


def parse_operand(value: str) -> float:
    """Parse a raw query value into a finite float.

    Args:
        value: Raw query string value.

    Returns:
        The parsed number.

    Raises:
        ValueError: If the value is not a number or is not finite.
    """
    number = float(value)
    if not math.isfinite(number):
        raise ValueError("number is not finite")
    return number


def collect_parameters(operation: Operation, query: Mapping[str, str]) -> dict[str, str | None]:
    """Pick the operation's raw parameter values out of a query mapping.

    Canonical names take precedence over aliases.

    Args:
        operation: Operation being requested.
        query: Request query parameters.

    Returns:
        Raw values keyed by canonical parameter name; ``None`` when absent.
    """
    received: dict[str, str | None] = {}
    for index, name in enumerate(operation.parameters):
        value = query.get(name)
        if value is None and index < len(operation.aliases):
            value = query.get(operation.aliases[index])
        received[name] = value
    return received


def validate_operands(operation: Operation, query: Mapping[str, str]) -> OperationRequest:
    """Validate and parse the operands of a request.

    All parameters are checked for presence before any is parsed, so a
    request with both an absent and a malformed value reports the absent one.

    Args:
        operation: Operation being requested.
        query: Request query parameters.

    Returns:
        OperationRequest with parsed operands.

    Raises:
        MissingParameterError: If a required parameter is absent.
        NotANumberError: If a value is not a finite number.
    """
    received = collect_parameters(operation, query)

    missing = [name for name, value in received.items() if value is None]
    if missing:
        raise MissingParameterError(
            missing=missing,
            required=list(operation.parameters),
            received=received,
            example=f"{operation.path}?{operation.example_query()}",
        )

    operands: dict[str, float] = {}
    invalid: list[str] = []
    for name, value in received.items():
        try:
            operands[name] = parse_operand(value)
        except ValueError:
            invalid.append(name)
    if invalid:
        raise NotANumberError(invalid=invalid, received=received)

    return OperationRequest(operation=operation.name, operands=operands, received=received)
