"""Request and response bodies of the quote API.

Amounts travel as decimal strings so values up to 2**256-1 survive JSON.
Field names are camelCase on the wire and snake_case in Python.
"""

from pydantic import BaseModel, Field

from pairswap.models.types import Address, Uint256


class AmountOutRequest(BaseModel):
    """Single-hop exact-input quote."""

    amount_in: Uint256 = Field(alias="amountIn")
    reserve_in: Uint256 = Field(alias="reserveIn")
    reserve_out: Uint256 = Field(alias="reserveOut")

    model_config = {"populate_by_name": True}


class AmountInRequest(BaseModel):
    """Single-hop exact-output quote."""

    amount_out: Uint256 = Field(alias="amountOut")
    reserve_in: Uint256 = Field(alias="reserveIn")
    reserve_out: Uint256 = Field(alias="reserveOut")

    model_config = {"populate_by_name": True}


class AmountsOutRequest(BaseModel):
    """Multi-hop exact-input quote over (reserve_in, reserve_out) pairs."""

    amount_in: Uint256 = Field(alias="amountIn")
    reserves: list[tuple[Uint256, Uint256]] = Field(min_length=1)

    model_config = {"populate_by_name": True}


class AmountsInRequest(BaseModel):
    """Multi-hop exact-output quote over (reserve_in, reserve_out) pairs."""

    amount_out: Uint256 = Field(alias="amountOut")
    reserves: list[tuple[Uint256, Uint256]] = Field(min_length=1)

    model_config = {"populate_by_name": True}


class AmountResponse(BaseModel):
    amount: Uint256


class AmountsResponse(BaseModel):
    amounts: list[Uint256]


class PoolAddressResponse(BaseModel):
    """Derived pool address of a pair with its canonical ordering."""

    pool: Address
    token0: Address
    token1: Address


class ErrorResponse(BaseModel):
    """Body returned for engine errors."""

    code: str
    category: str
    detail: str | None = None


__all__ = [
    "AmountOutRequest",
    "AmountInRequest",
    "AmountsOutRequest",
    "AmountsInRequest",
    "AmountResponse",
    "AmountsResponse",
    "PoolAddressResponse",
    "ErrorResponse",
]
