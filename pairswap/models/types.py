"""Shared identity and amount types.

Asset, pool and account identities are 20-byte addresses written as
lowercase 0x-prefixed hex. Lowercase hex gives the total order used to
canonicalize token pairs (it matches numeric order of the address bytes).
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from pairswap.constants import UINT256_MAX
from pairswap.errors import ErrorCode, InvalidArgumentError


def validate_uint256(value: Any) -> str:
    """Validate that a value is a valid uint256 decimal string.

    Args:
        value: Value to validate (string or int)

    Returns:
        Valid uint256 as decimal string

    Raises:
        ValueError: If value is not a non-negative integer within uint256 range
    """
    if isinstance(value, bool):
        raise ValueError("Uint256 cannot be a boolean")
    if isinstance(value, int):
        int_value = value
    elif isinstance(value, str):
        try:
            int_value = int(value)
        except ValueError as err:
            raise ValueError(f"Uint256 must be a decimal integer string: '{value}'") from err
    else:
        raise ValueError(f"Uint256 must be string or int, got {type(value).__name__}")

    if int_value < 0:
        raise ValueError(f"Uint256 cannot be negative: {value}")
    if int_value > UINT256_MAX:
        raise ValueError(f"Uint256 overflow: {value} > 2^256-1")
    return str(int_value)


# 20-byte address (40 hex chars after 0x prefix)
Address = Annotated[str, Field(pattern=r"^0x[a-fA-F0-9]{40}$")]

# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]


def is_valid_address(address: str) -> bool:
    """Check if a string is a 0x-prefixed 20-byte hex address."""
    if not isinstance(address, str):
        return False
    if not address.startswith(("0x", "0X")) or len(address) != 42:
        return False
    try:
        int(address, 16)
    except ValueError:
        return False
    return True


def normalize_address(address: str, *, validate: bool = True) -> str:
    """Normalize an address to lowercase with a 0x prefix.

    Args:
        address: Address with or without 0x prefix, any case
        validate: If True (default), reject anything that is not 20 bytes of hex

    Raises:
        InvalidArgumentError: If validate=True and the address is malformed
    """
    addr = address.lower()
    if not addr.startswith("0x"):
        addr = "0x" + addr
    if validate and not is_valid_address(addr):
        raise InvalidArgumentError(ErrorCode.INVALID_ADDRESS, address)
    return addr


def address_to_bytes(address: str) -> bytes:
    """Raw 20 bytes of an address."""
    return bytes.fromhex(normalize_address(address)[2:])


def address_from_bytes(raw: bytes) -> str:
    """Address from the low 20 bytes of a digest or word."""
    return "0x" + raw[-20:].hex()
