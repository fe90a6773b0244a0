"""Error taxonomy for the AMM engine.

Every failure raised by the engine is an AMMError carrying an ErrorCode.
Codes are grouped into categories; each category has its own subclass so
callers can catch a whole category and still inspect the precise code.

All errors are fail-fast: the host rolls back every effect of the call
that raised, and nothing is retried internally.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(str, Enum):
    """Coarse classification of engine failures."""

    VALIDATION = "validation"
    PRECONDITION = "precondition"
    ECONOMIC = "economic"
    ARITHMETIC = "arithmetic"
    AUTH = "auth"
    NOT_FOUND = "not_found"


class ErrorCode(str, Enum):
    """Machine-readable failure reasons."""

    # Validation
    IDENTICAL_ADDRESSES = "IDENTICAL_ADDRESSES"
    ZERO_IDENTITY = "ZERO_IDENTITY"
    INVALID_PATH = "INVALID_PATH"
    INVALID_RECIPIENT = "INVALID_RECIPIENT"
    INVALID_ADDRESS = "INVALID_ADDRESS"
    INVALID_AMOUNT = "INVALID_AMOUNT"

    # Precondition
    EXPIRED = "EXPIRED"
    REENTRANT_CALL = "REENTRANT_CALL"
    NATIVE_REJECTED = "NATIVE_REJECTED"

    # Economic
    INSUFFICIENT_AMOUNT = "INSUFFICIENT_AMOUNT"
    INSUFFICIENT_LIQUIDITY = "INSUFFICIENT_LIQUIDITY"
    INSUFFICIENT_LIQUIDITY_MINTED = "INSUFFICIENT_LIQUIDITY_MINTED"
    INSUFFICIENT_LIQUIDITY_BURNED = "INSUFFICIENT_LIQUIDITY_BURNED"
    INSUFFICIENT_INPUT_AMOUNT = "INSUFFICIENT_INPUT_AMOUNT"
    INSUFFICIENT_OUTPUT_AMOUNT = "INSUFFICIENT_OUTPUT_AMOUNT"
    INSUFFICIENT_A_AMOUNT = "INSUFFICIENT_A_AMOUNT"
    INSUFFICIENT_B_AMOUNT = "INSUFFICIENT_B_AMOUNT"
    EXCESSIVE_INPUT_AMOUNT = "EXCESSIVE_INPUT_AMOUNT"
    INSUFFICIENT_REPAYMENT_0 = "INSUFFICIENT_REPAYMENT_0"
    INSUFFICIENT_REPAYMENT_1 = "INSUFFICIENT_REPAYMENT_1"
    K_INVARIANT_VIOLATION = "K_INVARIANT_VIOLATION"
    INSUFFICIENT_BALANCE = "INSUFFICIENT_BALANCE"
    INSUFFICIENT_ALLOWANCE = "INSUFFICIENT_ALLOWANCE"
    TRANSFER_FAILED = "TRANSFER_FAILED"

    # Arithmetic
    RESERVE_OVERFLOW = "RESERVE_OVERFLOW"
    MATH_UNDERFLOW = "MATH_UNDERFLOW"
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    UINT_OVERFLOW = "UINT_OVERFLOW"

    # Auth
    FORBIDDEN = "FORBIDDEN"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"

    # Not found
    ALREADY_EXISTS = "ALREADY_EXISTS"
    POOL_NOT_FOUND = "POOL_NOT_FOUND"
    CONTRACT_NOT_FOUND = "CONTRACT_NOT_FOUND"


class AMMError(Exception):
    """Base error for all engine failures.

    Attributes:
        code: The precise failure reason
        detail: Optional human-readable context
    """

    category: ErrorCategory

    def __init__(self, code: ErrorCode, detail: str | None = None) -> None:
        self.code = code
        self.detail = detail
        message = code.value if detail is None else f"{code.value}: {detail}"
        super().__init__(message)


class InvalidArgumentError(AMMError):
    """Malformed identities, paths or recipients."""

    category = ErrorCategory.VALIDATION


class PreconditionError(AMMError):
    """Call made in a state that does not allow it (expired, reentrant)."""

    category = ErrorCategory.PRECONDITION


class EconomicError(AMMError):
    """Amounts that would break the pool's economics or the caller's bounds."""

    category = ErrorCategory.ECONOMIC


class ArithmeticFault(AMMError, ArithmeticError):
    """Bounded-integer arithmetic failure."""

    category = ErrorCategory.ARITHMETIC


class AuthorizationError(AMMError):
    """Caller or signature not allowed to perform the call."""

    category = ErrorCategory.AUTH


class PoolLookupError(AMMError):
    """Pool or contract registry conflicts and misses."""

    category = ErrorCategory.NOT_FOUND


__all__ = [
    "AMMError",
    "ArithmeticFault",
    "AuthorizationError",
    "EconomicError",
    "ErrorCategory",
    "ErrorCode",
    "InvalidArgumentError",
    "PoolLookupError",
    "PreconditionError",
]
