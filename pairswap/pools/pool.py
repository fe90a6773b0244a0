"""Constant-product pool: the invariant engine.

A pool owns the reserves of exactly one canonical token pair and is itself
the pool-share token. It follows a deposit-then-credit protocol: callers
move tokens (or shares) into the pool first, then call mint / burn / swap,
and the pool infers amounts from its actual balances instead of trusting
declared amounts.

Invariant checked on every swap, with a fee of fee_bps charged on inputs:
    (balance0 * 10000 - amount0_in * fee_bps) * (balance1 * 10000 - amount1_in * fee_bps)
        >= reserve0 * reserve1 * 10000**2

Every mutating entry point runs inside the pool's exclusive section. The
section is entered before any transfer or callback and left only after the
call's last external effect, so a flash-swap borrower calling back into
the same pool is rejected with REENTRANT_CALL.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

import structlog

from pairswap.chain.capabilities import Fungible, SignatureVerifier, SwapCallee
from pairswap.chain.host import Chain
from pairswap.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from pairswap.constants import BURN_ADDRESS, FEE_DENOMINATOR, UINT32_MODULUS
from pairswap.errors import (
    ArithmeticFault,
    AuthorizationError,
    EconomicError,
    ErrorCode,
    InvalidArgumentError,
    PreconditionError,
)
from pairswap.log_config import short
from pairswap.math.uq112x112 import price_ratio
from pairswap.models.events import Burn, FlashBorrow, Mint, Swap, Sync
from pairswap.models.types import normalize_address
from pairswap.pools.share_token import PoolShareToken
from pairswap.safe_int import S, Uint256Overflow

logger = structlog.get_logger()


class PoolStatus(str, Enum):
    """Reentrancy guard state."""

    IDLE = "idle"
    BUSY = "busy"


class Pool(PoolShareToken):
    """Reserve accounting, liquidity, swaps, flash borrows and price accumulators.

    Pools are created by a Registry, which deploys the pool at its derived
    address and immediately calls `initialize`.

    Args:
        chain: Host the pool lives on
        address: Derived pool address
        registry: Address of the creating registry (the only allowed initializer)
        config: Fee, locked-liquidity and share-token settings
        verifier: Signature recovery for share permits
    """

    def __init__(
        self,
        chain: Chain,
        address: str,
        registry: str,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        verifier: SignatureVerifier | None = None,
    ) -> None:
        super().__init__(chain, address, config, verifier)
        self.registry = normalize_address(registry)
        self.minimum_liquidity = config.minimum_liquidity
        self.fee_bps = config.swap_fee_bps
        self.token0: str | None = None
        self.token1: str | None = None
        self.reserve0 = 0
        self.reserve1 = 0
        self.block_timestamp_last = 0
        self.price0_cumulative_last = 0
        self.price1_cumulative_last = 0
        # reserve0 * reserve1 after the most recent mint or burn
        self.k_last = 0
        self.status = PoolStatus.IDLE
        self._guard = threading.Lock()

    def __repr__(self) -> str:
        return f"Pool({self.address}, {self.token0}, {self.token1})"

    def initialize(self, sender: str, token0: str, token1: str) -> None:
        """Bind the pool to its canonical pair. Registry only, once.

        Raises:
            AuthorizationError: FORBIDDEN for any other caller or a second call
        """
        if normalize_address(sender) != self.registry:
            raise AuthorizationError(ErrorCode.FORBIDDEN, "only the registry may initialize")
        if self.token0 is not None:
            raise AuthorizationError(ErrorCode.FORBIDDEN, "already initialized")
        with self._chain.atomic():
            self._chain.set_attr(self, "token0", normalize_address(token0))
            self._chain.set_attr(self, "token1", normalize_address(token1))

    def get_reserves(self) -> tuple[int, int, int]:
        """(reserve0, reserve1, block_timestamp_last)."""
        return self.reserve0, self.reserve1, self.block_timestamp_last

    # --- Exclusive section ---

    @contextmanager
    def _lock(self) -> Iterator[None]:
        """Hold the pool for the duration of one mutating call.

        Raises:
            PreconditionError: REENTRANT_CALL if the pool is already busy
        """
        # Other threads queue on the host transaction; only a call from
        # inside this pool's own section can find the guard taken
        with self._chain.atomic():
            if not self._guard.acquire(blocking=False):
                raise PreconditionError(ErrorCode.REENTRANT_CALL, short(self.address))
            self.status = PoolStatus.BUSY
            try:
                yield
            finally:
                self.status = PoolStatus.IDLE
                self._guard.release()

    # --- Helpers ---

    def _token(self, token: str | None) -> Fungible:
        if token is None:
            raise PreconditionError(ErrorCode.FORBIDDEN, "pool not initialized")
        return self._chain.contract_at(token)

    def _held_balances(self) -> tuple[int, int]:
        return (
            self._token(self.token0).balance_of(self.address),
            self._token(self.token1).balance_of(self.address),
        )

    def _safe_transfer(self, token: str | None, to: str, value: int) -> None:
        if self._token(token).transfer(self.address, to, value) is False:
            raise EconomicError(ErrorCode.TRANSFER_FAILED, f"{token} -> {to}")

    def _require_valid_recipient(self, to: str) -> str:
        to = normalize_address(to)
        if to in (self.token0, self.token1):
            raise InvalidArgumentError(ErrorCode.INVALID_RECIPIENT, to)
        return to

    def _callback(self, sender: str, to: str, amount0: int, amount1: int, data: bytes) -> None:
        callee = self._chain.contract_at(to) if self._chain.has_contract(to) else None
        if not isinstance(callee, SwapCallee):
            raise InvalidArgumentError(
                ErrorCode.INVALID_RECIPIENT, f"{to} cannot receive callbacks"
            )
        callee.on_swap_callback(sender, amount0, amount1, data)

    def _update(self, balance0: int, balance1: int, reserve0: int, reserve1: int) -> None:
        """Store new reserves and accumulate prices over the elapsed interval.

        Accumulation uses the reserves in force before this update and is
        skipped when no time has passed or either reserve was zero.
        """
        try:
            balance0 = S(balance0).to_uint112()
            balance1 = S(balance1).to_uint112()
        except Uint256Overflow as err:
            raise ArithmeticFault(ErrorCode.RESERVE_OVERFLOW, str(err)) from err
        block_timestamp = self._chain.timestamp % UINT32_MODULUS
        elapsed = (block_timestamp - self.block_timestamp_last) % UINT32_MODULUS
        if elapsed > 0 and reserve0 != 0 and reserve1 != 0:
            self._chain.set_attr(
                self,
                "price0_cumulative_last",
                self.price0_cumulative_last + price_ratio(reserve1, reserve0) * elapsed,
            )
            self._chain.set_attr(
                self,
                "price1_cumulative_last",
                self.price1_cumulative_last + price_ratio(reserve0, reserve1) * elapsed,
            )
        self._chain.set_attr(self, "reserve0", balance0)
        self._chain.set_attr(self, "reserve1", balance1)
        self._chain.set_attr(self, "block_timestamp_last", block_timestamp)
        self._chain.emit(Sync(self.address, balance0, balance1))

    # --- Liquidity ---

    def mint(self, sender: str, to: str) -> int:
        """Issue shares for tokens deposited since the last update.

        The first deposit mints sqrt(amount0 * amount1) shares and locks
        minimum_liquidity of them at the burn sink forever.

        Returns:
            Shares credited to `to`

        Raises:
            EconomicError: INSUFFICIENT_LIQUIDITY_MINTED if no shares result
        """
        with self._lock():
            to = normalize_address(to)
            reserve0, reserve1 = self.reserve0, self.reserve1
            balance0, balance1 = self._held_balances()
            amount0 = S(balance0) - S(reserve0)
            amount1 = S(balance1) - S(reserve1)

            total_supply = self.total_supply
            if total_supply == 0:
                liquidity = (amount0 * amount1).isqrt().value - self.minimum_liquidity
                self._mint(BURN_ADDRESS, self.minimum_liquidity)
            else:
                liquidity = (
                    (amount0 * S(total_supply) // S(reserve0))
                    .min(amount1 * S(total_supply) // S(reserve1))
                    .value
                )
            if liquidity <= 0:
                raise EconomicError(ErrorCode.INSUFFICIENT_LIQUIDITY_MINTED)

            self._mint(to, liquidity)
            self._update(balance0, balance1, reserve0, reserve1)
            self._chain.set_attr(self, "k_last", self.reserve0 * self.reserve1)
            self._chain.emit(Mint(self.address, normalize_address(sender), amount0.value, amount1.value))

        logger.debug(
            "liquidity_minted",
            pool=short(self.address),
            to=short(to),
            liquidity=liquidity,
            amount0=amount0.value,
            amount1=amount1.value,
        )
        return liquidity

    def burn(self, sender: str, to: str) -> tuple[int, int]:
        """Redeem the shares held by the pool itself for both tokens.

        Amounts are pro rata to current balances, so unsynced donations are
        distributed as well.

        Returns:
            (amount0, amount1) sent to `to`

        Raises:
            EconomicError: INSUFFICIENT_LIQUIDITY_BURNED if either amount is zero
        """
        with self._lock():
            to = normalize_address(to)
            reserve0, reserve1 = self.reserve0, self.reserve1
            balance0, balance1 = self._held_balances()
            liquidity = self.balance_of(self.address)

            if self.total_supply == 0:
                raise EconomicError(ErrorCode.INSUFFICIENT_LIQUIDITY_BURNED, "no shares issued")
            total_supply = S(self.total_supply)
            amount0 = (S(liquidity) * S(balance0) // total_supply).value
            amount1 = (S(liquidity) * S(balance1) // total_supply).value
            if amount0 <= 0 or amount1 <= 0:
                raise EconomicError(ErrorCode.INSUFFICIENT_LIQUIDITY_BURNED)

            self._burn(self.address, liquidity)
            self._safe_transfer(self.token0, to, amount0)
            self._safe_transfer(self.token1, to, amount1)
            balance0, balance1 = self._held_balances()

            self._update(balance0, balance1, reserve0, reserve1)
            self._chain.set_attr(self, "k_last", self.reserve0 * self.reserve1)
            self._chain.emit(Burn(self.address, normalize_address(sender), amount0, amount1, to))

        logger.debug(
            "liquidity_burned",
            pool=short(self.address),
            to=short(to),
            liquidity=liquidity,
            amount0=amount0,
            amount1=amount1,
        )
        return amount0, amount1

    # --- Trading ---

    def swap(
        self,
        sender: str,
        amount0_out: int,
        amount1_out: int,
        to: str,
        data: bytes = b"",
    ) -> None:
        """Send outputs optimistically, then require the fee-adjusted invariant.

        With non-empty `data` the recipient is called back before inputs are
        measured, so it can pay for the outputs it already holds (flash swap).

        Raises:
            EconomicError: INSUFFICIENT_OUTPUT_AMOUNT, INSUFFICIENT_LIQUIDITY,
                INSUFFICIENT_INPUT_AMOUNT or K_INVARIANT_VIOLATION
            InvalidArgumentError: INVALID_RECIPIENT if `to` is one of the pool's tokens
        """
        if amount0_out <= 0 and amount1_out <= 0:
            raise EconomicError(ErrorCode.INSUFFICIENT_OUTPUT_AMOUNT)
        if amount0_out < 0 or amount1_out < 0:
            raise InvalidArgumentError(ErrorCode.INVALID_AMOUNT, "negative output")

        with self._lock():
            reserve0, reserve1 = self.reserve0, self.reserve1
            if amount0_out >= reserve0 or amount1_out >= reserve1:
                raise EconomicError(ErrorCode.INSUFFICIENT_LIQUIDITY)

            to = self._require_valid_recipient(to)
            if amount0_out > 0:
                self._safe_transfer(self.token0, to, amount0_out)
            if amount1_out > 0:
                self._safe_transfer(self.token1, to, amount1_out)
            if data:
                self._callback(normalize_address(sender), to, amount0_out, amount1_out, data)
            balance0, balance1 = self._held_balances()

            amount0_in = S(balance0).saturating_sub(S(reserve0) - S(amount0_out)).value
            amount1_in = S(balance1).saturating_sub(S(reserve1) - S(amount1_out)).value
            if amount0_in <= 0 and amount1_in <= 0:
                raise EconomicError(ErrorCode.INSUFFICIENT_INPUT_AMOUNT)

            balance0_adjusted = S(balance0) * S(FEE_DENOMINATOR) - S(amount0_in) * S(self.fee_bps)
            balance1_adjusted = S(balance1) * S(FEE_DENOMINATOR) - S(amount1_in) * S(self.fee_bps)
            k_required = S(reserve0) * S(reserve1) * S(FEE_DENOMINATOR**2)
            if balance0_adjusted * balance1_adjusted < k_required:
                raise EconomicError(ErrorCode.K_INVARIANT_VIOLATION)

            self._update(balance0, balance1, reserve0, reserve1)
            self._chain.emit(
                Swap(
                    self.address,
                    normalize_address(sender),
                    amount0_in,
                    amount1_in,
                    amount0_out,
                    amount1_out,
                    to,
                )
            )

        logger.debug(
            "swap_executed",
            pool=short(self.address),
            amount0_in=amount0_in,
            amount1_in=amount1_in,
            amount0_out=amount0_out,
            amount1_out=amount1_out,
            flash=bool(data),
        )

    def flash_borrow(
        self,
        sender: str,
        to: str,
        amount0: int,
        amount1: int,
        data: bytes,
    ) -> None:
        """Lend both tokens for the duration of a callback, fee free.

        Each token's balance after the callback must be at least its balance
        before the loan; no cross-token settlement is accepted.

        Raises:
            EconomicError: INSUFFICIENT_LIQUIDITY if an amount exceeds the
                held balance, INSUFFICIENT_REPAYMENT_0/1 if not repaid
        """
        if amount0 < 0 or amount1 < 0:
            raise InvalidArgumentError(ErrorCode.INVALID_AMOUNT, "negative loan")

        with self._lock():
            before0, before1 = self._held_balances()
            if amount0 > before0 or amount1 > before1:
                raise EconomicError(ErrorCode.INSUFFICIENT_LIQUIDITY)
            to = self._require_valid_recipient(to)

            if amount0 > 0:
                self._safe_transfer(self.token0, to, amount0)
            if amount1 > 0:
                self._safe_transfer(self.token1, to, amount1)
            self._callback(normalize_address(sender), to, amount0, amount1, data)

            after0, after1 = self._held_balances()
            if after0 < before0:
                raise EconomicError(ErrorCode.INSUFFICIENT_REPAYMENT_0, f"{after0} < {before0}")
            if after1 < before1:
                raise EconomicError(ErrorCode.INSUFFICIENT_REPAYMENT_1, f"{after1} < {before1}")

            self._update(after0, after1, self.reserve0, self.reserve1)
            self._chain.emit(FlashBorrow(self.address, normalize_address(sender), amount0, amount1, to))

        logger.debug(
            "flash_borrow_repaid",
            pool=short(self.address),
            borrower=short(to),
            amount0=amount0,
            amount1=amount1,
        )

    # --- Reconciliation ---

    def skim(self, sender: str, to: str) -> tuple[int, int]:
        """Send balances in excess of the reserves to `to`.

        Returns:
            (excess0, excess1) transferred
        """
        with self._lock():
            to = normalize_address(to)
            balance0, balance1 = self._held_balances()
            excess0 = S(balance0).saturating_sub(self.reserve0).value
            excess1 = S(balance1).saturating_sub(self.reserve1).value
            if excess0:
                self._safe_transfer(self.token0, to, excess0)
            if excess1:
                self._safe_transfer(self.token1, to, excess1)
        logger.debug("pool_skimmed", pool=short(self.address), excess0=excess0, excess1=excess1)
        return excess0, excess1

    def sync(self, sender: str) -> None:
        """Force the reserves to match the actual balances."""
        with self._lock():
            balance0, balance1 = self._held_balances()
            self._update(balance0, balance1, self.reserve0, self.reserve1)
        logger.debug("pool_synced", pool=short(self.address), sender=short(sender))


__all__ = ["Pool", "PoolStatus"]
