"""Custom exceptions for the calculator."""

from .schemas import ErrorCode, OperationError


class CalculatorError(Exception):
    """Base exception for all calculator errors."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class OperandError(CalculatorError):
    """Base exception for rejected operands and arithmetic domain errors.

    Attributes:
        received: Raw query values of the operation's parameters.
    """

    code_value: ErrorCode
    example: str | None = None

    def __init__(self, message: str, received: dict[str, str | None] | None = None):
        super().__init__(message=message, code=self.code_value.value)
        self.received = received or {}

    def to_error(self, received: dict[str, str | None] | None = None) -> OperationError:
        """Convert the exception into an OperationError value.

        Args:
            received: Raw inputs to echo; defaults to those given at raise time.
        """
        return OperationError(
            code=self.code_value,
            message=self.message,
            received=self.received if received is None else received,
            example=self.example,
        )


class MissingParameterError(OperandError):
    """Raised when a required query parameter is absent.

    Attributes:
        missing: Names of the absent parameters.
        example: Example request path with a valid query string.
    """

    code_value = ErrorCode.missing_parameter

    def __init__(
        self,
        missing: list[str],
        required: list[str],
        received: dict[str, str | None],
        example: str | None = None,
    ):
        if len(required) == 1:
            message = f"Parameter '{required[0]}' is required"
        else:
            message = f"Both {' and '.join(required)} are required"
        super().__init__(message=message, received=received)
        self.missing = missing
        self.example = example


class NotANumberError(OperandError):
    """Raised when a parameter value is not a finite decimal number.

    Attributes:
        invalid: Names of the parameters that failed to parse.
    """

    code_value = ErrorCode.not_a_number

    def __init__(self, invalid: list[str], received: dict[str, str | None]):
        super().__init__(
            message=f"Parameters must be valid numbers: {', '.join(invalid)}",
            received=received,
        )
        self.invalid = invalid


class DivisionByZeroError(OperandError):
    """Raised when dividing by zero."""

    code_value = ErrorCode.division_by_zero

    def __init__(self, received: dict[str, str | None] | None = None):
        super().__init__(message="Division by zero is not allowed", received=received)


class ModuloByZeroError(OperandError):
    """Raised when taking a remainder modulo zero."""

    code_value = ErrorCode.modulo_by_zero

    def __init__(self, received: dict[str, str | None] | None = None):
        super().__init__(message="Modulo by zero is not allowed", received=received)


class NegativeRadicandError(OperandError):
    """Raised when taking the square root of a negative number."""

    code_value = ErrorCode.negative_radicand

    def __init__(self, received: dict[str, str | None] | None = None):
        super().__init__(
            message="Cannot calculate square root of a negative number",
            received=received,
        )


class NonFiniteResultError(OperandError):
    """Raised when an operation has no finite floating-point result.

    Covers overflow to infinity and domain errors such as a negative base
    raised to a fractional exponent.
    """

    code_value = ErrorCode.non_finite_result

    def __init__(self, operation: str, received: dict[str, str | None] | None = None):
        super().__init__(
            message=f"{operation} operation does not produce a finite number",
            received=received,
        )
