"""Identity types and event records."""

from pairswap.models.events import (
    Approval,
    Burn,
    Deposit,
    Event,
    FlashBorrow,
    Mint,
    PairCreated,
    Swap,
    Sync,
    Transfer,
    Withdrawal,
)
from pairswap.models.types import (
    Address,
    Uint256,
    address_from_bytes,
    address_to_bytes,
    is_valid_address,
    normalize_address,
)

__all__ = [
    # Types
    "Address",
    "Uint256",
    "address_from_bytes",
    "address_to_bytes",
    "is_valid_address",
    "normalize_address",
    # Events
    "Event",
    "PairCreated",
    "Transfer",
    "Approval",
    "Mint",
    "Burn",
    "Swap",
    "FlashBorrow",
    "Sync",
    "Deposit",
    "Withdrawal",
]
