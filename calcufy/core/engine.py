"""Arithmetic engine behind the calculator tool."""

import math
from decimal import Decimal
from enum import Enum
from typing import Union

Number = Union[int, float]


class Operation(str, Enum):
    """Arithmetic operations the calculator understands."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


class CalculationError(Exception):
    """Base class for failures reported by the engine."""


class DivisionByZeroError(CalculationError):
    """Raised when the divisor is zero."""

    def __init__(self):
        super().__init__("Cannot divide by zero")


class UnsupportedOperationError(CalculationError):
    """Raised for an operation tag outside :class:`Operation`."""

    def __init__(self, operation):
        self.operation = operation
        super().__init__(f"Unknown operation: {operation}")


_SYMBOLS = {
    Operation.ADD: "+",
    Operation.SUBTRACT: "-",
    Operation.MULTIPLY: "×",
    Operation.DIVIDE: "÷",
}


def _coerce(operation) -> Operation:
    try:
        return Operation(operation)
    except ValueError:
        raise UnsupportedOperationError(operation) from None


def to_float(value: Number) -> float:
    """Convert to binary64; integers too large for a float become +/-inf."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


def compute(operation: Union[Operation, str], a: Number, b: Number) -> float:
    """Apply ``operation`` to ``a`` and ``b`` in binary64 float arithmetic.

    Raises:
        DivisionByZeroError: for ``divide`` with ``b == 0`` (any ``a``, zero included).
        UnsupportedOperationError: if ``operation`` is not a known tag.
    """
    op = _coerce(operation)
    a, b = to_float(a), to_float(b)

    if op is Operation.ADD:
        return a + b
    if op is Operation.SUBTRACT:
        return a - b
    if op is Operation.MULTIPLY:
        return a * b
    if b == 0:
        raise DivisionByZeroError()
    return a / b


def symbol_for(operation: Union[Operation, str]) -> str:
    """Display symbol for an operation."""
    return _SYMBOLS[_coerce(operation)]


def format_number(value: Number) -> str:
    """Render a number the way a JSON host displays it.

    Uses the shortest round-trip digits, positional between 1e-7 and 1e21 and
    exponential outside (``5.0`` -> ``"5"``, ``1e-05`` -> ``"0.00001"``).
    """
    value = to_float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    k = len(digits)
    n = exponent + k  # value == 0.<digits> * 10**n

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if n > 0 else '-'}{abs(n - 1)}"
    return sign + text
