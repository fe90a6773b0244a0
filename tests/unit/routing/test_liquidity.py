"""Tests for adding and removing liquidity through the router."""

import pytest

from pairswap.errors import AuthorizationError, EconomicError, ErrorCode, PreconditionError
from pairswap.routing import AddLiquidityResult, RemoveLiquidityResult
from tests.helpers import ALICE, BOB, MAX_UINT256, TOKEN_A, TOKEN_B, fund, sign


@pytest.fixture
def alice(token_a, token_b, router):
    """ALICE holds 100k of each token, all approved to the router."""
    fund(token_a, ALICE, 100_000, spender=router.address)
    fund(token_b, ALICE, 100_000, spender=router.address)
    return ALICE


def add(router, deadline, amount_a, amount_b, min_a=0, min_b=0, to=ALICE):
    return router.add_liquidity(
        ALICE, TOKEN_A, TOKEN_B, amount_a, amount_b, min_a, min_b, to, deadline
    )


class TestAddLiquidity:
    def test_creates_pool_on_first_deposit(self, chain, registry, router, alice, deadline):
        assert registry.get_pool(TOKEN_A, TOKEN_B) is None
        result = add(router, deadline, 10_000, 10_000)
        assert result == AddLiquidityResult(10_000, 10_000, 9000)
        pool = chain.contract_at(registry.get_pool(TOKEN_A, TOKEN_B))
        assert pool.balance_of(ALICE) == 9000

    def test_proportional_b(self, router, alice, deadline, token_b):
        add(router, deadline, 10_000, 10_000)
        result = add(router, deadline, 1000, 3000)
        assert result == AddLiquidityResult(1000, 1000, 1000)
        assert token_b.balance_of(ALICE) == 100_000 - 11_000

    def test_proportional_a(self, router, alice, deadline):
        add(router, deadline, 10_000, 10_000)
        assert add(router, deadline, 3000, 1000) == AddLiquidityResult(1000, 1000, 1000)

    def test_b_minimum(self, router, alice, deadline):
        add(router, deadline, 10_000, 10_000)
        with pytest.raises(EconomicError) as exc_info:
            add(router, deadline, 1000, 3000, min_b=1001)
        assert exc_info.value.code == ErrorCode.INSUFFICIENT_B_AMOUNT

    def test_a_minimum(self, router, alice, deadline):
        add(router, deadline, 10_000, 10_000)
        with pytest.raises(EconomicError) as exc_info:
            add(router, deadline, 3000, 1000, min_a=1001)
        assert exc_info.value.code == ErrorCode.INSUFFICIENT_A_AMOUNT

    def test_expired_leaves_no_pool(self, chain, registry, router, alice):
        with pytest.raises(PreconditionError) as exc_info:
            add(router, chain.timestamp - 1, 10_000, 10_000)
        assert exc_info.value.code == ErrorCode.EXPIRED
        assert registry.pool_count() == 0

    def test_failed_deposit_rolls_back_pool_creation(self, registry, router, deadline, token_a):
        """Without approvals the transfer fails and the new pool disappears."""
        token_a.mint(ALICE, 10_000)
        with pytest.raises(EconomicError):
            add(router, deadline, 10_000, 10_000)
        assert registry.pool_count() == 0
        assert token_a.balance_of(ALICE) == 10_000


class TestRemoveLiquidity:
    @pytest.fixture
    def pool(self, chain, registry, router, alice, deadline):
        add(router, deadline, 10_000, 10_000)
        return chain.contract_at(registry.get_pool(TOKEN_A, TOKEN_B))

    def test_remove(self, router, pool, deadline, token_a, token_b):
        pool.approve(ALICE, router.address, 9000)
        result = router.remove_liquidity(
            ALICE, token_a.address, token_b.address, 9000, 9000, 9000, BOB, deadline
        )
        assert result == RemoveLiquidityResult(9000, 9000)
        assert token_a.balance_of(BOB) == 9000
        assert pool.balance_of(ALICE) == 0

    def test_remove_in_reverse_order(self, router, pool, deadline, token_a, token_b):
        token_b.mint(BOB, 10_000)
        token_b.transfer(BOB, pool.address, 10_000)
        pool.sync(BOB)
        pool.approve(ALICE, router.address, 9000)
        result = router.remove_liquidity(
            ALICE, token_b.address, token_a.address, 9000, 0, 0, BOB, deadline
        )
        assert result == RemoveLiquidityResult(18_000, 9000)
        assert token_b.balance_of(BOB) == 18_000

    def test_minimum_enforced(self, router, pool, deadline, token_a, token_b):
        pool.approve(ALICE, router.address, 9000)
        with pytest.raises(EconomicError) as exc_info:
            router.remove_liquidity(
                ALICE, token_a.address, token_b.address, 9000, 9001, 0, ALICE, deadline
            )
        assert exc_info.value.code == ErrorCode.INSUFFICIENT_A_AMOUNT
        assert pool.balance_of(ALICE) == 9000

    def test_requires_share_allowance(self, router, pool, deadline, token_a, token_b):
        with pytest.raises(EconomicError) as exc_info:
            router.remove_liquidity(
                ALICE, token_a.address, token_b.address, 9000, 0, 0, ALICE, deadline
            )
        assert exc_info.value.code == ErrorCode.INSUFFICIENT_ALLOWANCE

    def test_with_permit(self, router, pool, deadline, token_a, token_b):
        digest = pool.permit_digest(ALICE, router.address, 4500, 0, deadline)
        result = router.remove_liquidity_with_permit(
            ALICE,
            token_a.address,
            token_b.address,
            4500,
            0,
            0,
            ALICE,
            deadline,
            False,
            sign(ALICE, digest),
        )
        assert result == RemoveLiquidityResult(4500, 4500)
        assert pool.allowance(ALICE, router.address) == 0
        assert pool.nonces(ALICE) == 1

    def test_with_permit_approve_max(self, router, pool, deadline, token_a, token_b):
        digest = pool.permit_digest(ALICE, router.address, MAX_UINT256, 0, deadline)
        router.remove_liquidity_with_permit(
            ALICE,
            token_a.address,
            token_b.address,
            1000,
            0,
            0,
            ALICE,
            deadline,
            True,
            sign(ALICE, digest),
        )
        assert pool.allowance(ALICE, router.address) == MAX_UINT256

    def test_bad_permit_reverts_everything(self, router, pool, deadline, token_a, token_b):
        digest = pool.permit_digest(ALICE, router.address, 4500, 0, deadline)
        with pytest.raises(AuthorizationError) as exc_info:
            router.remove_liquidity_with_permit(
                ALICE,
                token_a.address,
                token_b.address,
                4500,
                0,
                0,
                ALICE,
                deadline,
                False,
                sign(BOB, digest),
            )
        assert exc_info.value.code == ErrorCode.INVALID_SIGNATURE
        assert pool.balance_of(ALICE) == 9000
