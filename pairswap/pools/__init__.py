"""Pools, the pool-share token, the registry and pool addressing."""

from pairswap.pools.addressing import pool_for, pool_salt, sort_tokens
from pairswap.pools.pool import Pool, PoolStatus
from pairswap.pools.registry import Registry
from pairswap.pools.share_token import PoolShareToken

__all__ = [
    "Pool",
    "PoolShareToken",
    "PoolStatus",
    "Registry",
    "pool_for",
    "pool_salt",
    "sort_tokens",
]
