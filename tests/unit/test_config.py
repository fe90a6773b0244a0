"""Tests for engine configuration."""

import pytest
from pydantic import ValidationError

from pairswap.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from pairswap.pools import Registry
from tests.helpers import BOB, seed_pool


class TestDefaults:
    def test_reference_values(self):
        assert DEFAULT_ENGINE_CONFIG.minimum_liquidity == 1000
        assert DEFAULT_ENGINE_CONFIG.swap_fee_bps == 30
        assert DEFAULT_ENGINE_CONFIG.fee_multiplier == 9970
        assert DEFAULT_ENGINE_CONFIG.chain_id == 1

    def test_frozen(self):
        with pytest.raises(ValidationError):
            DEFAULT_ENGINE_CONFIG.swap_fee_bps = 5  # type: ignore[misc]


class TestFromEnv:
    def test_unset_keeps_defaults(self):
        assert EngineConfig.from_env({}) == EngineConfig()

    def test_overrides(self):
        config = EngineConfig.from_env(
            {
                "PAIRSWAP_SWAP_FEE_BPS": "25",
                "PAIRSWAP_CHAIN_ID": "5",
                "PAIRSWAP_LOG_JSON": "yes",
                "PAIRSWAP_SHARE_NAME": "Test Shares",
            }
        )
        assert config.swap_fee_bps == 25
        assert config.fee_multiplier == 9975
        assert config.chain_id == 5
        assert config.log_json is True
        assert config.share_name == "Test Shares"

    def test_invalid_fee(self):
        with pytest.raises(ValidationError):
            EngineConfig.from_env({"PAIRSWAP_SWAP_FEE_BPS": "10000"})

    def test_unrelated_variables_ignored(self):
        assert EngineConfig.from_env({"PAIRSWAP_UNKNOWN": "1"}) == EngineConfig()


def test_custom_fee_reaches_pools(chain, token_a, token_b):
    registry = Registry(chain, config=EngineConfig(swap_fee_bps=0))
    pool, _ = seed_pool(chain, registry, token_a, token_b, 10_000, 10_000)
    token_a.mint(BOB, 1000)
    token_a.transfer(BOB, pool.address, 1000)
    pool.swap(BOB, 0, 909, BOB)
    assert token_b.balance_of(BOB) == 909
