"""Checked integer wrapper for reserve, share and price arithmetic.

Every amount the engine handles is an unsigned integer bounded by the
on-ledger word size. SafeInt makes the arithmetic on those amounts fail
loudly instead of silently going negative or dividing by zero:

- Subtraction below zero raises Underflow
- Division by zero raises DivisionByZero
- Values above the uint112 reserve bound raise Uint256Overflow on conversion

Usage pattern:
    from pairswap.safe_int import S

    def proportional(amount: int, supply: int, reserve: int) -> int:
        return (S(amount) * S(supply) // S(reserve)).value
"""

from __future__ import annotations

import math

from pairswap.constants import UINT112_MAX
from pairswap.errors import ArithmeticFault, ErrorCode


class SafeIntError(ArithmeticFault):
    """Base class for SafeInt arithmetic errors."""


class DivisionByZero(SafeIntError):
    """Division or modulo by zero."""

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(ErrorCode.DIVISION_BY_ZERO, detail)


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(ErrorCode.MATH_UNDERFLOW, detail)


class Uint256Overflow(SafeIntError):
    """Value is negative or exceeds the requested unsigned bound."""

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(ErrorCode.UINT_OVERFLOW, detail)


class SafeInt:
    """Integer with checked arithmetic operations.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    # --- Arithmetic operations ---

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _extract_value(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If result would be negative
        """
        other_val = _extract_value(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"{self._value} - {other_val}")
        return SafeInt(result)

    def __rsub__(self, other: int) -> SafeInt:
        result = other - self._value
        if result < 0:
            raise Underflow(f"{other} - {self._value}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _extract_value(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Integer division, rounding toward zero for non-negative operands.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _extract_value(other)
        if other_val == 0:
            raise DivisionByZero(f"{self._value} // 0")
        return SafeInt(self._value // other_val)

    # --- Comparison operations ---

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _extract_value(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _extract_value(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _extract_value(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _extract_value(other)

    # --- Conversion ---

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __index__(self) -> int:
        return self._value

    # --- Named operations ---

    def min(self, other: SafeInt | int) -> SafeInt:
        """Return minimum of self and other."""
        return SafeInt(min(self._value, _extract_value(other)))

    def saturating_sub(self, other: SafeInt | int) -> SafeInt:
        """Subtract, clamping the result at zero instead of raising."""
        return SafeInt(max(0, self._value - _extract_value(other)))

    def isqrt(self) -> SafeInt:
        """Floor of the square root.

        Raises:
            Underflow: If the value is negative
        """
        if self._value < 0:
            raise Underflow(f"sqrt({self._value})")
        return SafeInt(math.isqrt(self._value))

    def to_uint112(self) -> int:
        """Convert to int, validating uint112 bounds."""
        if not 0 <= self._value <= UINT112_MAX:
            raise Uint256Overflow(f"value out of uint112 range: {self._value}")
        return self._value



def _extract_value(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
