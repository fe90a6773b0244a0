"""Pairswap - constant-product AMM engine with a multi-hop router."""

from pairswap.chain import Chain
from pairswap.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from pairswap.errors import AMMError, ErrorCode
from pairswap.pools import Pool, Registry
from pairswap.routing import Router

__version__ = "0.1.0"
__all__ = [
    "AMMError",
    "Chain",
    "DEFAULT_ENGINE_CONFIG",
    "EngineConfig",
    "ErrorCode",
    "Pool",
    "Registry",
    "Router",
    "__version__",
]
