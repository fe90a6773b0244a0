"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Addresses, amounts and the genesis timestamp
- factories: Pool seeding, signing and stand-in contracts
"""

from tests.helpers.constants import (
    ALICE,
    BOB,
    CAROL,
    FOT_TOKEN,
    GENESIS_TIMESTAMP,
    MAX_UINT256,
    ONE,
    REGISTRY,
    ROUTER,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    WNATIVE,
)
from tests.helpers.factories import (
    POOL_ENTRY_POINTS,
    FakeVerifier,
    ScriptedBorrower,
    fund,
    seed_native_pool,
    seed_pool,
    sign,
)

__all__ = [
    # Constants
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "FOT_TOKEN",
    "WNATIVE",
    "ALICE",
    "BOB",
    "CAROL",
    "REGISTRY",
    "ROUTER",
    "GENESIS_TIMESTAMP",
    "ONE",
    "MAX_UINT256",
    # Factories
    "seed_pool",
    "seed_native_pool",
    "fund",
    "sign",
    "FakeVerifier",
    "ScriptedBorrower",
    "POOL_ENTRY_POINTS",
]
