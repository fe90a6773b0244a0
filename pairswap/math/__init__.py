"""Pure math: constant-product quoting and UQ112x112 fixed point."""

from pairswap.math.pricing import (
    DEFAULT_FEE_MULTIPLIER,
    fold_amounts_in,
    fold_amounts_out,
    get_amount_in,
    get_amount_out,
    get_amounts_in,
    get_amounts_out,
    quote,
)

__all__ = [
    "DEFAULT_FEE_MULTIPLIER",
    "quote",
    "get_amount_out",
    "get_amount_in",
    "fold_amounts_out",
    "fold_amounts_in",
    "get_amounts_out",
    "get_amounts_in",
]
