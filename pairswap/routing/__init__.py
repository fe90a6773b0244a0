"""User-facing routing over the registry's pools."""

from pairswap.routing.router import Router
from pairswap.routing.types import AddLiquidityResult, RemoveLiquidityResult

__all__ = ["AddLiquidityResult", "RemoveLiquidityResult", "Router"]
