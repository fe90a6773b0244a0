"""Host environment: clock, contracts, native balances and transactions."""

from pairswap.chain.capabilities import (
    Fungible,
    NativeReceiver,
    NativeWrapper,
    SignatureVerifier,
    SwapCallee,
)
from pairswap.chain.host import Chain
from pairswap.chain.token import ERC20Token, FeeOnTransferToken, WrappedNative

__all__ = [
    "Chain",
    "ERC20Token",
    "FeeOnTransferToken",
    "WrappedNative",
    "Fungible",
    "NativeReceiver",
    "NativeWrapper",
    "SignatureVerifier",
    "SwapCallee",
]
