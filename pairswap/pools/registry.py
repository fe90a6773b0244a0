"""Pool registry: creates one pool per unordered token pair.

The registry deploys every pool at its derived address (see
`pairswap.pools.addressing.pool_for`) and keeps an ordered list of all pools
created so far. Creating a pool that already exists is rejected rather than
returning the existing one.
"""

from __future__ import annotations

import structlog

from pairswap.chain.capabilities import SignatureVerifier
from pairswap.chain.host import Chain
from pairswap.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from pairswap.errors import ErrorCode, InvalidArgumentError, PoolLookupError
from pairswap.log_config import short
from pairswap.models.events import PairCreated
from pairswap.models.types import normalize_address
from pairswap.pools.addressing import pool_for, sort_tokens
from pairswap.pools.pool import Pool

logger = structlog.get_logger()


class Registry:
    """Factory and directory of pools.

    Args:
        chain: Host the registry and its pools are deployed on
        address: Explicit registry address (a fresh one is derived otherwise)
        config: Passed to every pool it creates
        verifier: Signature recovery used by pool-share permits
    """

    def __init__(
        self,
        chain: Chain,
        address: str | None = None,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        verifier: SignatureVerifier | None = None,
    ) -> None:
        self._chain = chain
        self._config = config
        self._verifier = verifier
        self.address = normalize_address(address) if address else chain.new_address("registry")
        # Keyed by the canonical (token0, token1) pair
        self._pools: dict[tuple[str, str], str] = {}
        self._all_pools: list[str] = []
        chain.deploy(self)

    def __repr__(self) -> str:
        return f"Registry({self.address}, pools={len(self._all_pools)})"

    def create_pool(self, token_a: str, token_b: str) -> str:
        """Deploy the pool for a pair and initialize it with the canonical order.

        Returns:
            Address of the new pool

        Raises:
            InvalidArgumentError: IDENTICAL_ADDRESSES or ZERO_IDENTITY
            PoolLookupError: ALREADY_EXISTS if the pair already has a pool
        """
        token0, token1 = sort_tokens(token_a, token_b)
        if (token0, token1) in self._pools:
            raise PoolLookupError(ErrorCode.ALREADY_EXISTS, f"pool for {token0}/{token1}")

        address = pool_for(self.address, token0, token1)
        with self._chain.atomic():
            pool = Pool(self._chain, address, self.address, self._config, self._verifier)
            self._chain.deploy(pool)
            pool.initialize(self.address, token0, token1)
            self._chain.write(self._pools, (token0, token1), address)
            self._all_pools.append(address)
            self._chain.record(self._all_pools.pop)
            self._chain.emit(
                PairCreated(self.address, token0, token1, address, len(self._all_pools))
            )

        logger.info(
            "pool_created",
            pool=short(address),
            token0=short(token0),
            token1=short(token1),
            index=len(self._all_pools),
        )
        return address

    def get_pool(self, token_a: str, token_b: str) -> str | None:
        """Address of the pool for a pair in either order, or None."""
        token_a = normalize_address(token_a)
        token_b = normalize_address(token_b)
        if token_a == token_b:
            return None
        key = (token_a, token_b) if token_a < token_b else (token_b, token_a)
        return self._pools.get(key)

    def pool_count(self) -> int:
        return len(self._all_pools)

    def pool_at(self, index: int) -> str:
        """Pool address by creation order.

        Raises:
            InvalidArgumentError: INVALID_AMOUNT for an index outside the list
        """
        if not 0 <= index < len(self._all_pools):
            raise InvalidArgumentError(ErrorCode.INVALID_AMOUNT, f"pool index {index}")
        return self._all_pools[index]

    def all_pools(self) -> list[str]:
        return list(self._all_pools)


__all__ = ["Registry"]
