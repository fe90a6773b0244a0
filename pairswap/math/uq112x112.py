"""UQ112x112 fixed-point helpers for the price accumulators.

A reserve ratio is encoded with 112 fractional bits, so
`uqdiv(encode(reserve1), reserve0)` is `reserve1 / reserve0` scaled by 2**112.
"""

from pairswap.constants import Q112
from pairswap.safe_int import S


def encode(value: int) -> int:
    """Encode a uint112 as UQ112x112."""
    return (S(value) * S(Q112)).value


def uqdiv(encoded: int, divisor: int) -> int:
    """Divide a UQ112x112 by a uint112, returning UQ112x112."""
    return (S(encoded) // S(divisor)).value


def decode(encoded: int) -> int:
    """Integer part of a UQ112x112 value."""
    return encoded >> 112


def price_ratio(numerator_reserve: int, denominator_reserve: int) -> int:
    """numerator_reserve / denominator_reserve as UQ112x112."""
    return uqdiv(encode(numerator_reserve), denominator_reserve)


def time_weighted_average(
    cumulative_start: int, cumulative_end: int, elapsed: int
) -> int:
    """Average UQ112x112 price between two accumulator observations.

    Consumers sample an accumulator twice and divide the difference by the
    elapsed seconds.
    """
    return ((S(cumulative_end) - S(cumulative_start)) // S(elapsed)).value
