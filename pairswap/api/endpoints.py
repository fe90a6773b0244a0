"""API endpoints for the quote service."""

from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, Query

from pairswap.api.models import (
    AmountInRequest,
    AmountOutRequest,
    AmountResponse,
    AmountsInRequest,
    AmountsOutRequest,
    AmountsResponse,
    PoolAddressResponse,
)
from pairswap.config import EngineConfig
from pairswap.math import pricing
from pairswap.pools.addressing import pool_for, sort_tokens

logger = structlog.get_logger()

router = APIRouter()


@lru_cache(maxsize=1)
def _env_config() -> EngineConfig:
    return EngineConfig.from_env()


def get_config() -> EngineConfig:
    """Dependency provider for the engine configuration.

    Override this in tests to quote with a different fee:
        app.dependency_overrides[get_config] = lambda: EngineConfig(swap_fee_bps=0)
    """
    return _env_config()


def _hops(reserves: list[tuple[str, str]]) -> list[tuple[int, int]]:
    return [(int(reserve_in), int(reserve_out)) for reserve_in, reserve_out in reserves]


@router.post("/quote/amount-out")
async def amount_out(
    request: AmountOutRequest, config: EngineConfig = Depends(get_config)
) -> AmountResponse:
    """Maximum output for an exact input against one pool's reserves."""
    amount = pricing.get_amount_out(
        int(request.amount_in),
        int(request.reserve_in),
        int(request.reserve_out),
        config.fee_multiplier,
    )
    return AmountResponse(amount=str(amount))


@router.post("/quote/amount-in")
async def amount_in(
    request: AmountInRequest, config: EngineConfig = Depends(get_config)
) -> AmountResponse:
    """Minimum input for an exact output against one pool's reserves."""
    amount = pricing.get_amount_in(
        int(request.amount_out),
        int(request.reserve_in),
        int(request.reserve_out),
        config.fee_multiplier,
    )
    return AmountResponse(amount=str(amount))


@router.post("/quote/amounts-out")
async def amounts_out(
    request: AmountsOutRequest, config: EngineConfig = Depends(get_config)
) -> AmountsResponse:
    """Amounts along a multi-hop route for an exact input."""
    amounts = pricing.fold_amounts_out(
        int(request.amount_in), _hops(request.reserves), config.fee_multiplier
    )
    logger.debug("quoted_amounts_out", hops=len(request.reserves), amount_out=amounts[-1])
    return AmountsResponse(amounts=[str(a) for a in amounts])


@router.post("/quote/amounts-in")
async def amounts_in(
    request: AmountsInRequest, config: EngineConfig = Depends(get_config)
) -> AmountsResponse:
    """Amounts along a multi-hop route for an exact output."""
    amounts = pricing.fold_amounts_in(
        int(request.amount_out), _hops(request.reserves), config.fee_multiplier
    )
    logger.debug("quoted_amounts_in", hops=len(request.reserves), amount_in=amounts[0])
    return AmountsResponse(amounts=[str(a) for a in amounts])


@router.get("/pools/address")
async def pool_address(
    registry: str = Query(...),
    token_a: str = Query(...),
    token_b: str = Query(...),
) -> PoolAddressResponse:
    """Derived address of a pair's pool, whether or not it exists yet."""
    token0, token1 = sort_tokens(token_a, token_b)
    return PoolAddressResponse(
        pool=pool_for(registry, token0, token1), token0=token0, token1=token1
    )
