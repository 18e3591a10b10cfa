"""Arithmetic operations exposed by the service."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Tuple

from .exceptions import (
    DivisionByZeroError,
    ModuloByZeroError,
    NegativeRadicandError,
    NonFiniteResultError,
)


def add(a: float, b: float) -> float:
    return a + b


def subtract(a: float, b: float) -> float:
    return a - b


def multiply(a: float, b: float) -> float:
    return a * b


def divide(a: float, b: float) -> float:
    """Divide ``a`` by ``b``.

    Raises:
        DivisionByZeroError: If ``b`` is zero (either sign).
    """
    if b == 0:
        raise DivisionByZeroError()
    return a / b


def power(base: float, exponent: float) -> float:
    """Raise ``base`` to ``exponent`` with ``math.pow``.

    Raises:
        NonFiniteResultError: On overflow or when the result is undefined
            in the reals (negative base with a fractional exponent, zero to
            a negative power).
    """
    try:
        return math.pow(base, exponent)
    except (ValueError, OverflowError) as exc:
        raise NonFiniteResultError("power") from exc


def square_root(num: float) -> float:
    """Return the principal square root of ``num``.

    Raises:
        NegativeRadicandError: If ``num`` is negative.
    """
    if num < 0:
        raise NegativeRadicandError()
    # sqrt(-0.0) is -0.0; the principal root is reported as 0.0
    return math.sqrt(num) + 0.0


def modulo(a: float, b: float) -> float:
    """Return the floating-point remainder of ``a / b``.

    Follows ``math.fmod``: the result carries the sign of ``a``
    (``-7 mod 3 == -1``), unlike Python's ``%`` operator.

    Raises:
        ModuloByZeroError: If ``b`` is zero (either sign).
    """
    if b == 0:
        raise ModuloByZeroError()
    return math.fmod(a, b)


@dataclass(frozen=True)
class Operation:
    """Describes one endpoint-backed arithmetic operation.

    Attributes:
        name: Operation name, also the endpoint path segment.
        parameters: Canonical query parameter names, in operand order.
        compute: Pure function applied to the parsed operands.
        aliases: Alternate query names accepted for ``parameters``, same order.
        example: Example query values used in the API documentation.
        notes: Per-parameter notes used in the API documentation.
    """

    name: str
    parameters: Tuple[str, ...]
    compute: Callable[..., float]
    aliases: Tuple[str, ...] = ()
    example: Tuple[str, ...] = ()
    notes: Dict[str, str] = field(default_factory=dict)

    @property
    def path(self) -> str:
        return f"/{self.name}"

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def example_query(self) -> str:
        """Build an example query string, e.g. ``num1=5&num2=3``."""
        return "&".join(f"{name}={value}" for name, value in zip(self.parameters, self.example))


OPERATIONS: Dict[str, Operation] = {
    "add": Operation("add", ("num1", "num2"), add, example=("5", "3")),
    "subtract": Operation("subtract", ("num1", "num2"), subtract, example=("10", "4")),
    "multiply": Operation("multiply", ("num1", "num2"), multiply, example=("7", "6")),
    "divide": Operation(
        "divide",
        ("num1", "num2"),
        divide,
        example=("20", "5"),
        notes={"num2": "non-zero"},
    ),
    "power": Operation(
        "power",
        ("base", "exponent"),
        power,
        aliases=("num1", "num2"),
        example=("2", "10"),
    ),
    "sqrt": Operation(
        "sqrt",
        ("num",),
        square_root,
        example=("16",),
        notes={"num": "non-negative"},
    ),
    "modulo": Operation(
        "modulo",
        ("num1", "num2"),
        modulo,
        aliases=("dividend", "divisor"),
        example=("10", "3"),
        notes={"num2": "non-zero"},
    ),
}


def get_operation(name: str) -> Operation:
    """Look up an operation by name.

    Raises:
        KeyError: If the operation is not registered.
    """
    return OPERATIONS[name]
