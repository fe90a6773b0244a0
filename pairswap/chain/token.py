"""Reference fungible assets for the host.

ERC20Token implements the Fungible capability with journaled balances;
FeeOnTransferToken burns a cut of every transfer; WrappedNative wraps the
host's native asset one-to-one.
"""

from __future__ import annotations

import structlog

from pairswap.chain.host import Chain
from pairswap.constants import UINT256_MAX, ZERO_ADDRESS
from pairswap.errors import EconomicError, ErrorCode
from pairswap.log_config import short
from pairswap.models.events import Approval, Deposit, Transfer, Withdrawal
from pairswap.models.types import normalize_address

logger = structlog.get_logger()


class ERC20Token:
    """Plain fungible token.

    Args:
        chain: Host the token is deployed on
        symbol: Ticker, also used to derive the address when none is given
        decimals: Display decimals (not used by the engine)
        address: Explicit address; lets tests control canonical ordering
    """

    def __init__(
        self,
        chain: Chain,
        symbol: str,
        decimals: int = 18,
        address: str | None = None,
    ) -> None:
        self._chain = chain
        self.symbol = symbol
        self.decimals = decimals
        self.address = normalize_address(address) if address else chain.new_address(symbol)
        self.total_supply = 0
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        chain.deploy(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbol}, {self.address})"

    def balance_of(self, owner: str) -> int:
        return self._balances.get(normalize_address(owner), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def mint(self, to: str, value: int) -> None:
        """Create new tokens (test faucet / issuer action)."""
        with self._chain.atomic():
            to = normalize_address(to)
            self._chain.set_attr(self, "total_supply", self.total_supply + value)
            self._chain.write(self._balances, to, self.balance_of(to) + value)
            self._chain.emit(Transfer(self.address, ZERO_ADDRESS, to, value))

    def approve(self, sender: str, spender: str, value: int) -> bool:
        with self._chain.atomic():
            owner = normalize_address(sender)
            spender = normalize_address(spender)
            self._chain.write(self._allowances, (owner, spender), value)
            self._chain.emit(Approval(self.address, owner, spender, value))
        return True

    def transfer(self, sender: str, to: str, value: int) -> bool:
        with self._chain.atomic():
            self._transfer(normalize_address(sender), normalize_address(to), value)
        return True

    def transfer_from(self, spender: str, owner: str, to: str, value: int) -> bool:
        with self._chain.atomic():
            owner = normalize_address(owner)
            spender = normalize_address(spender)
            allowed = self.allowance(owner, spender)
            if allowed != UINT256_MAX:
                if allowed < value:
                    raise EconomicError(
                        ErrorCode.INSUFFICIENT_ALLOWANCE, f"{self.symbol}: {allowed} < {value}"
                    )
                self._chain.write(self._allowances, (owner, spender), allowed - value)
            self._transfer(owner, normalize_address(to), value)
        return True

    def _transfer(self, sender: str, to: str, value: int) -> None:
        balance = self.balance_of(sender)
        if value < 0 or balance < value:
            raise EconomicError(
                ErrorCode.INSUFFICIENT_BALANCE, f"{self.symbol}: {balance} < {value}"
            )
        self._chain.write(self._balances, sender, balance - value)
        self._chain.write(self._balances, to, self.balance_of(to) + value)
        self._chain.emit(Transfer(self.address, sender, to, value))

    def _burn(self, owner: str, value: int) -> None:
        balance = self.balance_of(owner)
        if balance < value:
            raise EconomicError(
                ErrorCode.INSUFFICIENT_BALANCE, f"{self.symbol}: {balance} < {value}"
            )
        self._chain.write(self._balances, owner, balance - value)
        self._chain.set_attr(self, "total_supply", self.total_supply - value)
        self._chain.emit(Transfer(self.address, owner, ZERO_ADDRESS, value))


class FeeOnTransferToken(ERC20Token):
    """Token that burns `fee_bps` of every transfer, so recipients get less than sent."""

    def __init__(
        self,
        chain: Chain,
        symbol: str,
        fee_bps: int = 100,
        decimals: int = 18,
        address: str | None = None,
    ) -> None:
        self.fee_bps = fee_bps
        super().__init__(chain, symbol, decimals, address)

    def _transfer(self, sender: str, to: str, value: int) -> None:
        fee = value * self.fee_bps // 10_000
        super()._transfer(sender, to, value)
        if fee:
            self._burn(to, fee)


class WrappedNative(ERC20Token):
    """One-to-one fungible wrapper of the host's native asset."""

    def __init__(self, chain: Chain, symbol: str = "WNATIVE", address: str | None = None) -> None:
        super().__init__(chain, symbol, 18, address)

    def deposit(self, sender: str, value: int) -> None:
        """Wrap `value` native units sent along with the call."""
        with self._chain.atomic():
            sender = normalize_address(sender)
            self._chain.attach_value(sender, self.address, value)
            self._chain.set_attr(self, "total_supply", self.total_supply + value)
            self._chain.write(self._balances, sender, self.balance_of(sender) + value)
            self._chain.emit(Deposit(self.address, sender, value))

    def withdraw(self, sender: str, value: int) -> None:
        """Unwrap `value` and send the native units back to the sender."""
        with self._chain.atomic():
            sender = normalize_address(sender)
            balance = self.balance_of(sender)
            if balance < value:
                raise EconomicError(
                    ErrorCode.INSUFFICIENT_BALANCE, f"{self.symbol}: {balance} < {value}"
                )
            self._chain.write(self._balances, sender, balance - value)
            self._chain.set_attr(self, "total_supply", self.total_supply - value)
            self._chain.emit(Withdrawal(self.address, sender, value))
            self._chain.send_native(self.address, sender, value)
        logger.debug("native_unwrapped", owner=short(sender), value=value)
