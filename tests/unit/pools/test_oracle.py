"""Tests for the time-weighted price accumulators."""

from pairswap.constants import Q112
from pairswap.math.uq112x112 import time_weighted_average
from tests.helpers import BOB, seed_pool


def test_no_accumulation_from_empty_pool(chain, registry, token_a, token_b):
    pool, _ = seed_pool(chain, registry, token_a, token_b, 10_000, 20_000)
    assert pool.price0_cumulative_last == 0
    assert pool.price1_cumulative_last == 0
    assert pool.block_timestamp_last == chain.timestamp % 2**32


def test_accumulates_previous_reserves(chain, registry, token_a, token_b):
    pool, _ = seed_pool(chain, registry, token_a, token_b, 10_000, 20_000)
    chain.advance(10)
    pool.sync(BOB)
    assert pool.price0_cumulative_last == 20 * Q112
    assert pool.price1_cumulative_last == 5 * Q112


def test_same_timestamp_skips_accumulation(chain, registry, token_a, token_b):
    pool, _ = seed_pool(chain, registry, token_a, token_b, 10_000, 20_000)
    pool.sync(BOB)
    assert pool.price0_cumulative_last == 0


def test_uses_reserves_before_the_update(chain, registry, token_a, token_b):
    """A donation synced now only affects the price from now on."""
    pool, _ = seed_pool(chain, registry, token_a, token_b, 10_000, 10_000)
    chain.advance(5)
    token_b.mint(BOB, 10_000)
    token_b.transfer(BOB, pool.address, 10_000)
    pool.sync(BOB)
    assert pool.price0_cumulative_last == 5 * Q112
    chain.advance(5)
    pool.sync(BOB)
    assert pool.price0_cumulative_last == 5 * Q112 + 10 * Q112


def test_timestamp_wraparound(chain, registry, token_a, token_b):
    chain.set_timestamp(2**32 - 5)
    pool, _ = seed_pool(chain, registry, token_a, token_b, 10_000, 10_000)
    chain.set_timestamp(2**32 + 5)
    pool.sync(BOB)
    assert pool.block_timestamp_last == 5
    assert pool.price0_cumulative_last == 10 * Q112


def test_time_weighted_average_between_observations(chain, registry, token_a, token_b):
    pool, _ = seed_pool(chain, registry, token_a, token_b, 10_000, 30_000)
    chain.advance(1)
    pool.sync(BOB)
    start = pool.price0_cumulative_last
    chain.advance(60)
    pool.sync(BOB)
    assert time_weighted_average(start, pool.price0_cumulative_last, 60) == 3 * Q112
