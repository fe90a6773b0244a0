"""Deterministic pool addressing.

A pool's address is a pure function of the registry address and the two
token addresses (the CREATE2 rule):

    keccak256(0xff ++ registry ++ keccak256(token0 ++ token1) ++ init_code_hash)[12:]

Anyone can compute it without asking the registry, which is how the
router addresses the next hop of a multi-hop swap.
"""

from __future__ import annotations

from eth_abi.packed import encode_packed
from eth_utils import keccak

from pairswap.constants import CREATE2_PREFIX, POOL_INIT_CODE_HASH, ZERO_ADDRESS
from pairswap.errors import ErrorCode, InvalidArgumentError
from pairswap.models.types import address_from_bytes, address_to_bytes, normalize_address


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Canonical (token0, token1) ordering of a pair.

    Raises:
        InvalidArgumentError: IDENTICAL_ADDRESSES or ZERO_IDENTITY
    """
    token_a = normalize_address(token_a)
    token_b = normalize_address(token_b)
    if token_a == token_b:
        raise InvalidArgumentError(ErrorCode.IDENTICAL_ADDRESSES, token_a)
    token0, token1 = (token_a, token_b) if token_a < token_b else (token_b, token_a)
    if token0 == ZERO_ADDRESS:
        raise InvalidArgumentError(ErrorCode.ZERO_IDENTITY)
    return token0, token1


def pool_salt(token0: str, token1: str) -> bytes:
    """keccak256 of the tightly packed canonical pair."""
    return keccak(
        encode_packed(["address", "address"], [address_to_bytes(token0), address_to_bytes(token1)])
    )


def pool_for(
    registry: str,
    token_a: str,
    token_b: str,
    init_code_hash: bytes = POOL_INIT_CODE_HASH,
) -> str:
    """Address of the pool for a pair, whether or not it has been created yet.

    Args:
        registry: Address of the registry that creates the pool
        token_a: Either token of the pair
        token_b: The other token
        init_code_hash: Digest identifying the pool code

    Returns:
        Lowercase 0x-prefixed pool address
    """
    token0, token1 = sort_tokens(token_a, token_b)
    digest = keccak(
        CREATE2_PREFIX + address_to_bytes(registry) + pool_salt(token0, token1) + init_code_hash
    )
    return address_from_bytes(digest[12:])


__all__ = ["sort_tokens", "pool_salt", "pool_for"]
