"""Pytest configuration and fixtures."""

import pytest

from pairswap.chain import Chain, ERC20Token, FeeOnTransferToken, WrappedNative
from pairswap.pools import Registry
from pairswap.routing import Router
from tests.helpers import (
    FOT_TOKEN,
    GENESIS_TIMESTAMP,
    REGISTRY,
    ROUTER,
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    WNATIVE,
    FakeVerifier,
)


@pytest.fixture
def chain() -> Chain:
    """A fresh host with a fixed clock."""
    return Chain(chain_id=1, timestamp=GENESIS_TIMESTAMP)


@pytest.fixture
def verifier() -> FakeVerifier:
    return FakeVerifier()


@pytest.fixture
def registry(chain: Chain, verifier: FakeVerifier) -> Registry:
    return Registry(chain, address=REGISTRY, verifier=verifier)


@pytest.fixture
def token_a(chain: Chain) -> ERC20Token:
    return ERC20Token(chain, "TKA", address=TOKEN_A)


@pytest.fixture
def token_b(chain: Chain) -> ERC20Token:
    return ERC20Token(chain, "TKB", address=TOKEN_B)


@pytest.fixture
def token_c(chain: Chain) -> ERC20Token:
    return ERC20Token(chain, "TKC", address=TOKEN_C)


@pytest.fixture
def fot_token(chain: Chain) -> FeeOnTransferToken:
    """Token that burns 1% of every transfer."""
    return FeeOnTransferToken(chain, "FOT", fee_bps=100, address=FOT_TOKEN)


@pytest.fixture
def wnative(chain: Chain) -> WrappedNative:
    return WrappedNative(chain, address=WNATIVE)


@pytest.fixture
def router(chain: Chain, registry: Registry, wnative: WrappedNative) -> Router:
    return Router(chain, registry, wnative.address, address=ROUTER)


@pytest.fixture
def deadline(chain: Chain) -> int:
    """A deadline ten minutes ahead of the chain clock."""
    return chain.timestamp + 600
