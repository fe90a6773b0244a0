"""Tests for swaps and withdrawals involving tokens that tax transfers.

FOT_TOKEN burns 1% of every transfer, so a pool funded with 10_000 holds 9_900.
"""

import pytest

from pairswap.errors import EconomicError, ErrorCode
from pairswap.math.pricing import get_amount_out
from tests.helpers import (
    ALICE,
    BOB,
    CAROL,
    FOT_TOKEN,
    TOKEN_B,
    WNATIVE,
    fund,
    seed_native_pool,
    seed_pool,
)


@pytest.fixture
def fot_pool(chain, registry, router, token_b, fot_token):
    """TOKEN_B (token0) / FOT_TOKEN (token1) pool at 10_000 / 9_900."""
    pool, _ = seed_pool(chain, registry, token_b, fot_token, 10_000, 10_000, provider=CAROL)
    assert pool.get_reserves()[:2] == (10_000, 9900)
    return pool


@pytest.fixture
def fot_native_pool(chain, router, fot_token):
    """FOT_TOKEN (token0) / native pool at 9_900 / 10_000."""
    pool, _ = seed_native_pool(chain, router, fot_token, 10_000, 10_000)
    assert pool.get_reserves()[:2] == (9900, 10_000)
    return pool


class TestTokenSwaps:
    def test_plain_swap_fails_on_taxed_input(self, router, fot_pool, fot_token, deadline):
        fund(fot_token, ALICE, 1000, spender=router.address)
        with pytest.raises(EconomicError) as exc_info:
            router.swap_exact_tokens_for_tokens(
                ALICE, 1000, 0, [FOT_TOKEN, TOKEN_B], BOB, deadline
            )
        assert exc_info.value.code == ErrorCode.K_INVARIANT_VIOLATION

    def test_taxed_input(self, router, fot_pool, fot_token, token_b, deadline):
        fund(fot_token, ALICE, 1000, spender=router.address)
        received = router.swap_exact_tokens_for_tokens_supporting_fee_on_transfer(
            ALICE, 1000, 0, [FOT_TOKEN, TOKEN_B], BOB, deadline
        )
        expected = get_amount_out(990, 9900, 10_000)
        assert received == expected
        assert token_b.balance_of(BOB) == expected

    def test_taxed_output(self, router, fot_pool, fot_token, token_b, deadline):
        fund(token_b, ALICE, 1000, spender=router.address)
        sent = get_amount_out(1000, 10_000, 9900)
        received = router.swap_exact_tokens_for_tokens_supporting_fee_on_transfer(
            ALICE, 1000, 0, [TOKEN_B, FOT_TOKEN], BOB, deadline
        )
        assert received == sent - sent // 100
        assert fot_token.balance_of(BOB) == received

    def test_slippage_checked_against_received(self, router, fot_pool, token_b, deadline):
        fund(token_b, ALICE, 1000, spender=router.address)
        sent = get_amount_out(1000, 10_000, 9900)
        with pytest.raises(EconomicError) as exc_info:
            router.swap_exact_tokens_for_tokens_supporting_fee_on_transfer(
                ALICE, 1000, sent, [TOKEN_B, FOT_TOKEN], BOB, deadline
            )
        assert exc_info.value.code == ErrorCode.INSUFFICIENT_OUTPUT_AMOUNT


class TestNativeSwaps:
    def test_taxed_input_for_native(self, chain, router, fot_native_pool, fot_token, deadline):
        fund(fot_token, ALICE, 1000, spender=router.address)
        amount_out = router.swap_exact_tokens_for_native_supporting_fee_on_transfer(
            ALICE, 1000, 0, [FOT_TOKEN, WNATIVE], BOB, deadline
        )
        assert amount_out == get_amount_out(990, 9900, 10_000)
        assert chain.native_balance(BOB) == amount_out

    def test_native_for_taxed_output(self, chain, router, fot_native_pool, fot_token, deadline):
        chain.fund_native(ALICE, 1000)
        sent = get_amount_out(1000, 10_000, 9900)
        received = router.swap_exact_native_for_tokens_supporting_fee_on_transfer(
            ALICE, 0, [WNATIVE, FOT_TOKEN], BOB, deadline, value=1000
        )
        assert received == sent - sent // 100
        assert chain.native_balance(ALICE) == 0


class TestRemoveLiquidity:
    def test_plain_native_removal_fails(self, router, fot_native_pool, deadline):
        fot_native_pool.approve(CAROL, router.address, 5000)
        with pytest.raises(EconomicError) as exc_info:
            router.remove_liquidity_native(CAROL, FOT_TOKEN, 5000, 0, 0, CAROL, deadline)
        assert exc_info.value.code == ErrorCode.INSUFFICIENT_BALANCE

    def test_supporting_removal_forwards_what_arrived(
        self, chain, router, fot_native_pool, fot_token, deadline
    ):
        shares = fot_native_pool.balance_of(CAROL)
        fot_native_pool.approve(CAROL, router.address, shares)
        native_before = chain.native_balance(CAROL)
        amount_native = router.remove_liquidity_native_supporting_fee_on_transfer(
            CAROL, FOT_TOKEN, shares, 0, 0, CAROL, deadline
        )
        assert chain.native_balance(CAROL) == native_before + amount_native
        assert fot_token.balance_of(router.address) == 0
        assert fot_token.balance_of(CAROL) > 0
