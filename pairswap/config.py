"""Engine configuration.

Defaults reproduce the reference pool: 0.3% input fee, 1000 locked
shares. Values can be overridden from PAIRSWAP_* environment variables.
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field

from pairswap.constants import DEFAULT_FEE_BPS, FEE_DENOMINATOR, MINIMUM_LIQUIDITY


class EngineConfig(BaseModel):
    """Centralized configuration for pools, routers and logging.

    Attributes:
        minimum_liquidity: Shares locked at the burn sink on first deposit
        swap_fee_bps: Input-side swap fee in basis points (30 = 0.3%)
        chain_id: Chain identifier bound into share-permit signatures
        share_name: Name of every pool-share token (EIP-712 domain name)
        share_symbol: Symbol of every pool-share token
        log_level: structlog filtering level name
        log_json: Render logs as JSON instead of console output
    """

    model_config = ConfigDict(frozen=True)

    minimum_liquidity: int = Field(default=MINIMUM_LIQUIDITY, gt=0)
    swap_fee_bps: int = Field(default=DEFAULT_FEE_BPS, ge=0, lt=FEE_DENOMINATOR)
    chain_id: int = Field(default=1, ge=0)
    share_name: str = "Pairswap V1"
    share_symbol: str = "PAIR-V1"
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def fee_multiplier(self) -> int:
        """Fee multiplier for swap math (10000 - fee_bps), 9970 by default."""
        return FEE_DENOMINATOR - self.swap_fee_bps

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> EngineConfig:
        """Build a config from PAIRSWAP_* environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}
        for field_name in cls.model_fields:
            raw = env.get(f"PAIRSWAP_{field_name.upper()}")
            if raw is None:
                continue
            if field_name == "log_json":
                overrides[field_name] = raw.lower() in ("true", "1", "yes")
            else:
                overrides[field_name] = raw
        return cls.model_validate(overrides)


# Default configuration instance
DEFAULT_ENGINE_CONFIG = EngineConfig()
