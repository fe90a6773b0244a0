"""Constant-product quoting math.

Formula: amount_out = (amount_in * fee * reserve_out) / (reserve_in * 10000 + amount_in * fee)

`fee` is the fee multiplier (10000 - fee_bps); the default 9970 charges
0.3% on the input before the constant-product division. All functions
are pure, operate on exact integers and round against the trader.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from pairswap.constants import FEE_DENOMINATOR
from pairswap.errors import EconomicError, ErrorCode, InvalidArgumentError
from pairswap.safe_int import S

DEFAULT_FEE_MULTIPLIER = 9970

# (token_in, token_out) -> (reserve_in, reserve_out)
ReserveLookup = Callable[[str, str], tuple[int, int]]


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Amount of B equivalent to amount_a of A at the current reserve ratio.

    Used to size proportional deposits; no fee is involved.

    Raises:
        EconomicError: INSUFFICIENT_AMOUNT if amount_a is zero,
            INSUFFICIENT_LIQUIDITY if either reserve is zero
    """
    if amount_a <= 0:
        raise EconomicError(ErrorCode.INSUFFICIENT_AMOUNT)
    if reserve_a <= 0 or reserve_b <= 0:
        raise EconomicError(ErrorCode.INSUFFICIENT_LIQUIDITY)
    return (S(amount_a) * S(reserve_b) // S(reserve_a)).value


def get_amount_out(
    amount_in: int,
    reserve_in: int,
    reserve_out: int,
    fee_multiplier: int = DEFAULT_FEE_MULTIPLIER,
) -> int:
    """Maximum output for an exact input.

    Args:
        amount_in: Input token amount
        reserve_in: Reserve of input token in pool
        reserve_out: Reserve of output token in pool
        fee_multiplier: 10000 - fee_bps (9970 for 0.3%)

    Returns:
        Output token amount, always strictly below reserve_out

    Raises:
        EconomicError: INSUFFICIENT_INPUT_AMOUNT or INSUFFICIENT_LIQUIDITY
    """
    if amount_in <= 0:
        raise EconomicError(ErrorCode.INSUFFICIENT_INPUT_AMOUNT)
    if reserve_in <= 0 or reserve_out <= 0:
        raise EconomicError(ErrorCode.INSUFFICIENT_LIQUIDITY)

    amount_in_with_fee = S(amount_in) * S(fee_multiplier)
    numerator = amount_in_with_fee * S(reserve_out)
    denominator = S(reserve_in) * S(FEE_DENOMINATOR) + amount_in_with_fee
    return (numerator // denominator).value


def get_amount_in(
    amount_out: int,
    reserve_in: int,
    reserve_out: int,
    fee_multiplier: int = DEFAULT_FEE_MULTIPLIER,
) -> int:
    """Minimum input required for an exact output.

    Formula: amount_in = (reserve_in * amount_out * 10000) / ((reserve_out - amount_out) * fee) + 1

    The trailing +1 rounds up so the pool's fee-adjusted invariant check
    can never fail by a one-unit shortfall.

    Raises:
        EconomicError: INSUFFICIENT_OUTPUT_AMOUNT on zero output,
            INSUFFICIENT_LIQUIDITY on empty reserves or amount_out >= reserve_out
    """
    if amount_out <= 0:
        raise EconomicError(ErrorCode.INSUFFICIENT_OUTPUT_AMOUNT)
    if reserve_in <= 0 or reserve_out <= 0:
        raise EconomicError(ErrorCode.INSUFFICIENT_LIQUIDITY)
    if amount_out >= reserve_out:
        raise EconomicError(ErrorCode.INSUFFICIENT_LIQUIDITY, "output exceeds reserve")

    numerator = S(reserve_in) * S(amount_out) * S(FEE_DENOMINATOR)
    denominator = (S(reserve_out) - S(amount_out)) * S(fee_multiplier)
    return ((numerator // denominator) + S(1)).value


def fold_amounts_out(
    amount_in: int,
    reserves: Sequence[tuple[int, int]],
    fee_multiplier: int = DEFAULT_FEE_MULTIPLIER,
) -> list[int]:
    """Propagate an exact input forward through hops given as (reserve_in, reserve_out).

    Returns:
        [amount_in, out_hop_0, ..., out_hop_n-1]
    """
    if not reserves:
        raise InvalidArgumentError(ErrorCode.INVALID_PATH)
    amounts = [amount_in]
    for reserve_in, reserve_out in reserves:
        amounts.append(get_amount_out(amounts[-1], reserve_in, reserve_out, fee_multiplier))
    return amounts


def fold_amounts_in(
    amount_out: int,
    reserves: Sequence[tuple[int, int]],
    fee_multiplier: int = DEFAULT_FEE_MULTIPLIER,
) -> list[int]:
    """Propagate an exact output backward through hops given as (reserve_in, reserve_out).

    Returns:
        [in_hop_0, ..., in_hop_n-1, amount_out]
    """
    if not reserves:
        raise InvalidArgumentError(ErrorCode.INVALID_PATH)
    amounts = [amount_out]
    for reserve_in, reserve_out in reversed(reserves):
        amounts.append(get_amount_in(amounts[-1], reserve_in, reserve_out, fee_multiplier))
    amounts.reverse()
    return amounts


def _hop_reserves(path: Sequence[str], get_reserves: ReserveLookup) -> list[tuple[int, int]]:
    if len(path) < 2:
        raise InvalidArgumentError(ErrorCode.INVALID_PATH, f"path has {len(path)} tokens")
    return [get_reserves(path[i], path[i + 1]) for i in range(len(path) - 1)]


def get_amounts_out(
    amount_in: int,
    path: Sequence[str],
    get_reserves: ReserveLookup,
    fee_multiplier: int = DEFAULT_FEE_MULTIPLIER,
) -> list[int]:
    """Amounts along a token path for an exact input.

    Args:
        amount_in: Exact amount of path[0]
        path: Ordered tokens, at least two
        get_reserves: Returns (reserve_in, reserve_out) for a hop

    Raises:
        InvalidArgumentError: INVALID_PATH if the path has fewer than two tokens
    """
    return fold_amounts_out(amount_in, _hop_reserves(path, get_reserves), fee_multiplier)


def get_amounts_in(
    amount_out: int,
    path: Sequence[str],
    get_reserves: ReserveLookup,
    fee_multiplier: int = DEFAULT_FEE_MULTIPLIER,
) -> list[int]:
    """Amounts along a token path for an exact output of path[-1]."""
    return fold_amounts_in(amount_out, _hop_reserves(path, get_reserves), fee_multiplier)


__all__ = [
    "DEFAULT_FEE_MULTIPLIER",
    "ReserveLookup",
    "quote",
    "get_amount_out",
    "get_amount_in",
    "fold_amounts_out",
    "fold_amounts_in",
    "get_amounts_out",
    "get_amounts_in",
]
