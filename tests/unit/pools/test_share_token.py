"""Tests for pool-share transfers and signed approvals."""

import pytest

from pairswap.chain import Chain
from pairswap.config import EngineConfig
from pairswap.errors import AuthorizationError, EconomicError, ErrorCode, PreconditionError
from pairswap.models.events import Approval
from pairswap.pools import Registry
from pairswap.pools.share_token import PoolShareToken
from tests.helpers import ALICE, BOB, CAROL, MAX_UINT256, seed_pool, sign


@pytest.fixture
def funded(chain, registry, token_a, token_b):
    """Pool in which ALICE holds 9000 shares."""
    pool, _ = seed_pool(chain, registry, token_a, token_b, 10_000, 10_000)
    return pool


class TestShareToken:
    def test_metadata(self, funded):
        assert funded.name == "Pairswap V1"
        assert funded.symbol == "PAIR-V1"
        assert funded.decimals == 18

    def test_transfer(self, funded):
        funded.transfer(ALICE, BOB, 100)
        assert funded.balance_of(BOB) == 100
        assert funded.balance_of(ALICE) == 8900

    def test_transfer_too_much(self, funded):
        with pytest.raises(EconomicError) as exc_info:
            funded.transfer(ALICE, BOB, 9001)
        assert exc_info.value.code == ErrorCode.INSUFFICIENT_BALANCE

    def test_transfer_from_with_infinite_allowance(self, funded):
        funded.approve(ALICE, BOB, MAX_UINT256)
        funded.transfer_from(BOB, ALICE, CAROL, 500)
        assert funded.allowance(ALICE, BOB) == MAX_UINT256
        assert funded.balance_of(CAROL) == 500

    def test_transfer_from_decrements(self, funded):
        funded.approve(ALICE, BOB, 600)
        funded.transfer_from(BOB, ALICE, CAROL, 500)
        assert funded.allowance(ALICE, BOB) == 100
        with pytest.raises(EconomicError) as exc_info:
            funded.transfer_from(BOB, ALICE, CAROL, 101)
        assert exc_info.value.code == ErrorCode.INSUFFICIENT_ALLOWANCE


class TestPermit:
    def _signed(self, pool, owner, spender, value, deadline, signer=None):
        digest = pool.permit_digest(owner, spender, value, pool.nonces(owner), deadline)
        return sign(signer or owner, digest)

    def test_permit_sets_allowance(self, chain, funded, deadline):
        signature = self._signed(funded, ALICE, BOB, 1234, deadline)
        funded.permit(ALICE, BOB, 1234, deadline, signature)
        assert funded.allowance(ALICE, BOB) == 1234
        assert funded.nonces(ALICE) == 1
        assert chain.events_of(Approval, emitter=funded.address)[-1] == Approval(
            funded.address, ALICE, BOB, 1234
        )

    def test_replay_rejected(self, funded, deadline):
        signature = self._signed(funded, ALICE, BOB, 1234, deadline)
        funded.permit(ALICE, BOB, 1234, deadline, signature)
        with pytest.raises(AuthorizationError) as exc_info:
            funded.permit(ALICE, BOB, 1234, deadline, signature)
        assert exc_info.value.code == ErrorCode.INVALID_SIGNATURE

    def test_wrong_signer(self, funded, deadline):
        signature = self._signed(funded, ALICE, BOB, 1, deadline, signer=BOB)
        with pytest.raises(AuthorizationError):
            funded.permit(ALICE, BOB, 1, deadline, signature)
        assert funded.nonces(ALICE) == 0

    def test_expired(self, chain, funded):
        deadline = chain.timestamp - 1
        signature = self._signed(funded, ALICE, BOB, 1, deadline)
        with pytest.raises(PreconditionError) as exc_info:
            funded.permit(ALICE, BOB, 1, deadline, signature)
        assert exc_info.value.code == ErrorCode.EXPIRED

    def test_deadline_equal_to_now_accepted(self, chain, funded):
        signature = self._signed(funded, ALICE, BOB, 1, chain.timestamp)
        funded.permit(ALICE, BOB, 1, chain.timestamp, signature)
        assert funded.allowance(ALICE, BOB) == 1

    def test_without_verifier_nothing_recovers(self, chain, token_a, token_b):
        bare = Registry(chain)
        pool, _ = seed_pool(chain, bare, token_a, token_b, 10_000, 10_000)
        deadline = chain.timestamp + 60
        signature = self._signed(pool, ALICE, BOB, 1, deadline)
        with pytest.raises(AuthorizationError):
            pool.permit(ALICE, BOB, 1, deadline, signature)

    def test_digest_bound_to_chain_id(self, funded, deadline):
        twin = PoolShareToken(Chain(chain_id=5), funded.address, EngineConfig(chain_id=5))
        assert twin.domain_separator != funded.domain_separator
        assert funded.permit_digest(ALICE, BOB, 1, 0, deadline) != twin.permit_digest(
            ALICE, BOB, 1, 0, deadline
        )
