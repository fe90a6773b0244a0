"""Type definitions for routing module."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AddLiquidityResult:
    """Amounts actually deposited and the shares minted for them."""

    amount_a: int
    amount_b: int
    liquidity: int


@dataclass
class RemoveLiquidityResult:
    """Amounts paid out for redeemed shares, in the caller's token order."""

    amount_a: int
    amount_b: int


__all__ = ["AddLiquidityResult", "RemoveLiquidityResult"]
