"""Router: stateless orchestration over the registry and its pools.

The router never holds funds between calls. For every operation it:
- checks the deadline once at entry
- pulls the caller's tokens straight into the pool (or wraps native value first)
- calls the pool's mint / burn / swap, which credit the real recipient

Multi-hop swaps send each pool's output directly to the next pool in the
path, so intermediate tokens never pass through the router. Every call runs
inside one host transaction, so a failure in any hop reverts all of them.

The `*_supporting_fee_on_transfer` variants do not trust precomputed amounts:
each hop's input is measured as the pool's balance minus its reserve, and
the slippage bound is checked against what the recipient actually received.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from pairswap.chain.capabilities import Fungible, NativeWrapper
from pairswap.chain.host import Chain
from pairswap.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from pairswap.constants import UINT256_MAX
from pairswap.errors import (
    EconomicError,
    ErrorCode,
    InvalidArgumentError,
    PoolLookupError,
    PreconditionError,
)
from pairswap.log_config import short
from pairswap.math import pricing
from pairswap.models.types import normalize_address
from pairswap.pools.addressing import pool_for, sort_tokens
from pairswap.pools.pool import Pool
from pairswap.pools.registry import Registry
from pairswap.routing.types import AddLiquidityResult, RemoveLiquidityResult

logger = structlog.get_logger()


class Router:
    """Liquidity and swap entry points for end users.

    Callers approve the router on their tokens (or pool shares) beforehand;
    native-value entry points take the attached amount as `value`.

    Args:
        chain: Host environment
        registry: Registry whose pools the router addresses
        wrapped_native: Address of the native wrapper token
        config: Fee used for quoting (must match the pools')
        address: Explicit router address
    """

    def __init__(
        self,
        chain: Chain,
        registry: Registry,
        wrapped_native: str,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        address: str | None = None,
    ) -> None:
        self._chain = chain
        self._registry = registry
        self._fee_multiplier = config.fee_multiplier
        self.registry = registry.address
        self.wrapped_native = normalize_address(wrapped_native)
        self.address = normalize_address(address) if address else chain.new_address("router")
        chain.deploy(self)

    def __repr__(self) -> str:
        return f"Router({self.address})"

    # --- Host hooks ---

    def receive_native(self, sender: str, value: int) -> None:
        """Accept plain native transfers only from the wrapper (unwrapping)."""
        if normalize_address(sender) != self.wrapped_native:
            raise PreconditionError(ErrorCode.NATIVE_REJECTED, f"from {sender}")

    # --- Lookups ---

    def _ensure(self, deadline: int) -> None:
        if deadline < self._chain.timestamp:
            raise PreconditionError(
                ErrorCode.EXPIRED, f"deadline {deadline} < now {self._chain.timestamp}"
            )

    def _token(self, address: str) -> Fungible:
        return self._chain.contract_at(address)

    def _wrapper(self) -> NativeWrapper:
        return self._chain.contract_at(self.wrapped_native)

    def _pool(self, token_a: str, token_b: str) -> Pool:
        address = pool_for(self.registry, token_a, token_b)
        if not self._chain.has_contract(address):
            raise PoolLookupError(ErrorCode.POOL_NOT_FOUND, f"{token_a}/{token_b}")
        return self._chain.contract_at(address)

    def _get_reserves(self, token_a: str, token_b: str) -> tuple[int, int]:
        """(reserve_a, reserve_b) of the pair's pool, in the caller's order."""
        token0, _ = sort_tokens(token_a, token_b)
        reserve0, reserve1, _ = self._pool(token_a, token_b).get_reserves()
        if normalize_address(token_a) == token0:
            return reserve0, reserve1
        return reserve1, reserve0

    def _path(self, path: Sequence[str]) -> list[str]:
        if len(path) < 2:
            raise InvalidArgumentError(ErrorCode.INVALID_PATH, f"path has {len(path)} tokens")
        return [normalize_address(token) for token in path]

    # --- Liquidity ---

    def _add_liquidity(
        self,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
    ) -> tuple[int, int]:
        """Optimal deposit amounts at the current reserve ratio.

        Creates the pool when the pair has none yet; an empty pool takes the
        desired amounts as they are.
        """
        if self._registry.get_pool(token_a, token_b) is None:
            self._registry.create_pool(token_a, token_b)
        reserve_a, reserve_b = self._get_reserves(token_a, token_b)
        if reserve_a == 0 and reserve_b == 0:
            return amount_a_desired, amount_b_desired

        amount_b_optimal = pricing.quote(amount_a_desired, reserve_a, reserve_b)
        if amount_b_optimal <= amount_b_desired:
            if amount_b_optimal < amount_b_min:
                raise EconomicError(
                    ErrorCode.INSUFFICIENT_B_AMOUNT, f"{amount_b_optimal} < {amount_b_min}"
                )
            return amount_a_desired, amount_b_optimal

        amount_a_optimal = pricing.quote(amount_b_desired, reserve_b, reserve_a)
        # amount_b_optimal > desired implies amount_a_optimal <= desired
        if amount_a_optimal < amount_a_min:
            raise EconomicError(
                ErrorCode.INSUFFICIENT_A_AMOUNT, f"{amount_a_optimal} < {amount_a_min}"
            )
        return amount_a_optimal, amount_b_desired

    def add_liquidity(
        self,
        sender: str,
        token_a: str,
        token_b: str,
        amount_a_desired: int,
        amount_b_desired: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> AddLiquidityResult:
        """Deposit both tokens in proportion and mint shares to `to`.

        Raises:
            PreconditionError: EXPIRED
            EconomicError: INSUFFICIENT_A_AMOUNT / INSUFFICIENT_B_AMOUNT when
                the proportional amount falls below its minimum
        """
        with self._chain.atomic():
            self._ensure(deadline)
            token_a = normalize_address(token_a)
            token_b = normalize_address(token_b)
            amount_a, amount_b = self._add_liquidity(
                token_a, token_b, amount_a_desired, amount_b_desired, amount_a_min, amount_b_min
            )
            pool = self._pool(token_a, token_b)
            self._token(token_a).transfer_from(self.address, sender, pool.address, amount_a)
            self._token(token_b).transfer_from(self.address, sender, pool.address, amount_b)
            liquidity = pool.mint(self.address, to)

        logger.info(
            "liquidity_added",
            pool=short(pool.address),
            amount_a=amount_a,
            amount_b=amount_b,
            liquidity=liquidity,
        )
        return AddLiquidityResult(amount_a, amount_b, liquidity)

    def add_liquidity_native(
        self,
        sender: str,
        token: str,
        amount_token_desired: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
        value: int,
    ) -> AddLiquidityResult:
        """Deposit a token against attached native value; unused value is refunded.

        Returns:
            AddLiquidityResult with amount_a the token amount and amount_b the
            native amount
        """
        with self._chain.atomic():
            self._ensure(deadline)
            sender = normalize_address(sender)
            token = normalize_address(token)
            self._chain.attach_value(sender, self.address, value)
            amount_token, amount_native = self._add_liquidity(
                token,
                self.wrapped_native,
                amount_token_desired,
                value,
                amount_token_min,
                amount_native_min,
            )
            pool = self._pool(token, self.wrapped_native)
            self._token(token).transfer_from(self.address, sender, pool.address, amount_token)
            wrapper = self._wrapper()
            wrapper.deposit(self.address, amount_native)
            wrapper.transfer(self.address, pool.address, amount_native)
            liquidity = pool.mint(self.address, to)
            if value > amount_native:
                self._chain.send_native(self.address, sender, value - amount_native)

        logger.info(
            "liquidity_added",
            pool=short(pool.address),
            amount_a=amount_token,
            amount_b=amount_native,
            liquidity=liquidity,
            refund=value - amount_native,
        )
        return AddLiquidityResult(amount_token, amount_native, liquidity)

    def _remove_liquidity(
        self,
        sender: str,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
    ) -> RemoveLiquidityResult:
        token_a = normalize_address(token_a)
        token_b = normalize_address(token_b)
        pool = self._pool(token_a, token_b)
        pool.transfer_from(self.address, sender, pool.address, liquidity)
        amount0, amount1 = pool.burn(self.address, to)
        token0, _ = sort_tokens(token_a, token_b)
        amount_a, amount_b = (amount0, amount1) if token_a == token0 else (amount1, amount0)
        if amount_a < amount_a_min:
            raise EconomicError(ErrorCode.INSUFFICIENT_A_AMOUNT, f"{amount_a} < {amount_a_min}")
        if amount_b < amount_b_min:
            raise EconomicError(ErrorCode.INSUFFICIENT_B_AMOUNT, f"{amount_b} < {amount_b_min}")

        logger.info(
            "liquidity_removed",
            pool=short(pool.address),
            liquidity=liquidity,
            amount_a=amount_a,
            amount_b=amount_b,
        )
        return RemoveLiquidityResult(amount_a, amount_b)

    def remove_liquidity(
        self,
        sender: str,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
    ) -> RemoveLiquidityResult:
        """Redeem shares for both tokens, sent to `to`.

        Raises:
            PreconditionError: EXPIRED
            EconomicError: INSUFFICIENT_A_AMOUNT / INSUFFICIENT_B_AMOUNT
        """
        with self._chain.atomic():
            self._ensure(deadline)
            return self._remove_liquidity(
                sender, token_a, token_b, liquidity, amount_a_min, amount_b_min, to
            )

    def _unwrap_to(self, to: str, amount_native: int) -> None:
        self._wrapper().withdraw(self.address, amount_native)
        self._chain.send_native(self.address, to, amount_native)

    def remove_liquidity_native(
        self,
        sender: str,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
    ) -> RemoveLiquidityResult:
        """Redeem shares of a token/native pool, paying native value out unwrapped.

        Returns:
            RemoveLiquidityResult with amount_a the token and amount_b the native amount
        """
        with self._chain.atomic():
            self._ensure(deadline)
            result = self._remove_liquidity(
                sender,
                token,
                self.wrapped_native,
                liquidity,
                amount_token_min,
                amount_native_min,
                self.address,
            )
            self._token(token).transfer(self.address, to, result.amount_a)
            self._unwrap_to(to, result.amount_b)
        return result

    def _permit(
        self,
        sender: str,
        token_a: str,
        token_b: str,
        liquidity: int,
        deadline: int,
        approve_max: bool,
        signature: bytes,
    ) -> None:
        value = UINT256_MAX if approve_max else liquidity
        self._pool(token_a, token_b).permit(sender, self.address, value, deadline, signature)

    def remove_liquidity_with_permit(
        self,
        sender: str,
        token_a: str,
        token_b: str,
        liquidity: int,
        amount_a_min: int,
        amount_b_min: int,
        to: str,
        deadline: int,
        approve_max: bool,
        signature: bytes,
    ) -> RemoveLiquidityResult:
        """remove_liquidity preceded by a signed share approval for the router."""
        with self._chain.atomic():
            self._ensure(deadline)
            self._permit(sender, token_a, token_b, liquidity, deadline, approve_max, signature)
            return self._remove_liquidity(
                sender, token_a, token_b, liquidity, amount_a_min, amount_b_min, to
            )

    def remove_liquidity_native_with_permit(
        self,
        sender: str,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
        approve_max: bool,
        signature: bytes,
    ) -> RemoveLiquidityResult:
        with self._chain.atomic():
            self._ensure(deadline)
            self._permit(
                sender, token, self.wrapped_native, liquidity, deadline, approve_max, signature
            )
            return self.remove_liquidity_native(
                sender, token, liquidity, amount_token_min, amount_native_min, to, deadline
            )

    def remove_liquidity_native_supporting_fee_on_transfer(
        self,
        sender: str,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
    ) -> int:
        """Like remove_liquidity_native, forwarding whatever token amount arrived.

        Returns:
            Native amount paid out
        """
        with self._chain.atomic():
            self._ensure(deadline)
            result = self._remove_liquidity(
                sender,
                token,
                self.wrapped_native,
                liquidity,
                amount_token_min,
                amount_native_min,
                self.address,
            )
            asset = self._token(token)
            asset.transfer(self.address, to, asset.balance_of(self.address))
            self._unwrap_to(to, result.amount_b)
        return result.amount_b

    def remove_liquidity_native_with_permit_supporting_fee_on_transfer(
        self,
        sender: str,
        token: str,
        liquidity: int,
        amount_token_min: int,
        amount_native_min: int,
        to: str,
        deadline: int,
        approve_max: bool,
        signature: bytes,
    ) -> int:
        with self._chain.atomic():
            self._ensure(deadline)
            self._permit(
                sender, token, self.wrapped_native, liquidity, deadline, approve_max, signature
            )
            return self.remove_liquidity_native_supporting_fee_on_transfer(
                sender, token, liquidity, amount_token_min, amount_native_min, to, deadline
            )

    # --- Swaps ---

    def _swap(self, amounts: list[int], path: list[str], to: str) -> None:
        """Execute precomputed hop outputs, chaining each pool's output into the next."""
        for i in range(len(path) - 1):
            token_in, token_out = path[i], path[i + 1]
            token0, _ = sort_tokens(token_in, token_out)
            amount_out = amounts[i + 1]
            amount0_out, amount1_out = (0, amount_out) if token_in == token0 else (amount_out, 0)
            recipient = pool_for(self.registry, token_out, path[i + 2]) if i < len(path) - 2 else to
            self._pool(token_in, token_out).swap(
                self.address, amount0_out, amount1_out, recipient, b""
            )

    def _log_swap(self, kind: str, path: list[str], amount_in: int, amount_out: int) -> None:
        logger.info(
            "swap_routed",
            kind=kind,
            hops=len(path) - 1,
            token_in=short(path[0]),
            token_out=short(path[-1]),
            amount_in=amount_in,
            amount_out=amount_out,
        )

    def swap_exact_tokens_for_tokens(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        """Sell an exact amount of path[0] for at least amount_out_min of path[-1].

        Returns:
            Amounts along the path, amount_in first

        Raises:
            EconomicError: INSUFFICIENT_OUTPUT_AMOUNT if the final amount is too low
        """
        with self._chain.atomic():
            self._ensure(deadline)
            path = self._path(path)
            amounts = self.get_amounts_out(amount_in, path)
            if amounts[-1] < amount_out_min:
                raise EconomicError(
                    ErrorCode.INSUFFICIENT_OUTPUT_AMOUNT, f"{amounts[-1]} < {amount_out_min}"
                )
            self._token(path[0]).transfer_from(
                self.address, sender, self._pool(path[0], path[1]).address, amounts[0]
            )
            self._swap(amounts, path, to)
        self._log_swap("exact_in", path, amounts[0], amounts[-1])
        return amounts

    def swap_tokens_for_exact_tokens(
        self,
        sender: str,
        amount_out: int,
        amount_in_max: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        """Buy an exact amount of path[-1] spending at most amount_in_max of path[0].

        Raises:
            EconomicError: EXCESSIVE_INPUT_AMOUNT if the required input is too high
        """
        with self._chain.atomic():
            self._ensure(deadline)
            path = self._path(path)
            amounts = self.get_amounts_in(amount_out, path)
            if amounts[0] > amount_in_max:
                raise EconomicError(
                    ErrorCode.EXCESSIVE_INPUT_AMOUNT, f"{amounts[0]} > {amount_in_max}"
                )
            self._token(path[0]).transfer_from(
                self.address, sender, self._pool(path[0], path[1]).address, amounts[0]
            )
            self._swap(amounts, path, to)
        self._log_swap("exact_out", path, amounts[0], amounts[-1])
        return amounts

    def _require_starts_native(self, path: list[str]) -> None:
        if path[0] != self.wrapped_native:
            raise InvalidArgumentError(ErrorCode.INVALID_PATH, "path must start with wrapped native")

    def _require_ends_native(self, path: list[str]) -> None:
        if path[-1] != self.wrapped_native:
            raise InvalidArgumentError(ErrorCode.INVALID_PATH, "path must end with wrapped native")

    def _wrap_into_first_pool(self, path: list[str], amount: int) -> None:
        wrapper = self._wrapper()
        wrapper.deposit(self.address, amount)
        wrapper.transfer(self.address, self._pool(path[0], path[1]).address, amount)

    def swap_exact_native_for_tokens(
        self,
        sender: str,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
        value: int,
    ) -> list[int]:
        """Sell all attached native value for tokens; path must start with the wrapper."""
        with self._chain.atomic():
            self._ensure(deadline)
            path = self._path(path)
            self._require_starts_native(path)
            self._chain.attach_value(sender, self.address, value)
            amounts = self.get_amounts_out(value, path)
            if amounts[-1] < amount_out_min:
                raise EconomicError(
                    ErrorCode.INSUFFICIENT_OUTPUT_AMOUNT, f"{amounts[-1]} < {amount_out_min}"
                )
            self._wrap_into_first_pool(path, amounts[0])
            self._swap(amounts, path, to)
        self._log_swap("exact_native_in", path, amounts[0], amounts[-1])
        return amounts

    def swap_tokens_for_exact_native(
        self,
        sender: str,
        amount_out: int,
        amount_in_max: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        """Buy an exact native amount; path must end with the wrapper."""
        with self._chain.atomic():
            self._ensure(deadline)
            path = self._path(path)
            self._require_ends_native(path)
            amounts = self.get_amounts_in(amount_out, path)
            if amounts[0] > amount_in_max:
                raise EconomicError(
                    ErrorCode.EXCESSIVE_INPUT_AMOUNT, f"{amounts[0]} > {amount_in_max}"
                )
            self._token(path[0]).transfer_from(
                self.address, sender, self._pool(path[0], path[1]).address, amounts[0]
            )
            self._swap(amounts, path, self.address)
            self._unwrap_to(to, amounts[-1])
        self._log_swap("exact_native_out", path, amounts[0], amounts[-1])
        return amounts

    def swap_exact_tokens_for_native(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> list[int]:
        """Sell an exact token amount for native value; path must end with the wrapper."""
        with self._chain.atomic():
            self._ensure(deadline)
            path = self._path(path)
            self._require_ends_native(path)
            amounts = self.get_amounts_out(amount_in, path)
            if amounts[-1] < amount_out_min:
                raise EconomicError(
                    ErrorCode.INSUFFICIENT_OUTPUT_AMOUNT, f"{amounts[-1]} < {amount_out_min}"
                )
            self._token(path[0]).transfer_from(
                self.address, sender, self._pool(path[0], path[1]).address, amounts[0]
            )
            self._swap(amounts, path, self.address)
            self._unwrap_to(to, amounts[-1])
        self._log_swap("exact_in_native_out", path, amounts[0], amounts[-1])
        return amounts

    def swap_native_for_exact_tokens(
        self,
        sender: str,
        amount_out: int,
        path: Sequence[str],
        to: str,
        deadline: int,
        value: int,
    ) -> list[int]:
        """Buy an exact token amount with attached native value; the rest is refunded.

        Raises:
            EconomicError: EXCESSIVE_INPUT_AMOUNT if the value does not cover the input
        """
        with self._chain.atomic():
            self._ensure(deadline)
            path = self._path(path)
            self._require_starts_native(path)
            sender = normalize_address(sender)
            self._chain.attach_value(sender, self.address, value)
            amounts = self.get_amounts_in(amount_out, path)
            if amounts[0] > value:
                raise EconomicError(ErrorCode.EXCESSIVE_INPUT_AMOUNT, f"{amounts[0]} > {value}")
            self._wrap_into_first_pool(path, amounts[0])
            self._swap(amounts, path, to)
            if value > amounts[0]:
                self._chain.send_native(self.address, sender, value - amounts[0])
        self._log_swap("native_in_exact_out", path, amounts[0], amounts[-1])
        return amounts

    # --- Swaps supporting fee-on-transfer tokens ---

    def _swap_supporting_fee_on_transfer(self, path: list[str], to: str) -> None:
        """Execute each hop with its input measured from the pool's balance delta."""
        for i in range(len(path) - 1):
            token_in, token_out = path[i], path[i + 1]
            token0, _ = sort_tokens(token_in, token_out)
            pool = self._pool(token_in, token_out)
            reserve0, reserve1, _ = pool.get_reserves()
            reserve_in, reserve_out = (
                (reserve0, reserve1) if token_in == token0 else (reserve1, reserve0)
            )
            amount_in = self._token(token_in).balance_of(pool.address) - reserve_in
            amount_out = pricing.get_amount_out(
                amount_in, reserve_in, reserve_out, self._fee_multiplier
            )
            amount0_out, amount1_out = (0, amount_out) if token_in == token0 else (amount_out, 0)
            recipient = pool_for(self.registry, token_out, path[i + 2]) if i < len(path) - 2 else to
            pool.swap(self.address, amount0_out, amount1_out, recipient, b"")

    def _received_at_least(self, token: str, owner: str, before: int, amount_out_min: int) -> int:
        received = self._token(token).balance_of(owner) - before
        if received < amount_out_min:
            raise EconomicError(ErrorCode.INSUFFICIENT_OUTPUT_AMOUNT, f"{received} < {amount_out_min}")
        return received

    def swap_exact_tokens_for_tokens_supporting_fee_on_transfer(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> int:
        """Exact-input swap tolerant of tokens that tax transfers.

        Returns:
            Amount of path[-1] actually received by `to`
        """
        with self._chain.atomic():
            self._ensure(deadline)
            path = self._path(path)
            to = normalize_address(to)
            self._token(path[0]).transfer_from(
                self.address, sender, self._pool(path[0], path[1]).address, amount_in
            )
            before = self._token(path[-1]).balance_of(to)
            self._swap_supporting_fee_on_transfer(path, to)
            received = self._received_at_least(path[-1], to, before, amount_out_min)
        self._log_swap("exact_in_fot", path, amount_in, received)
        return received

    def swap_exact_native_for_tokens_supporting_fee_on_transfer(
        self,
        sender: str,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
        value: int,
    ) -> int:
        with self._chain.atomic():
            self._ensure(deadline)
            path = self._path(path)
            self._require_starts_native(path)
            to = normalize_address(to)
            self._chain.attach_value(sender, self.address, value)
            self._wrap_into_first_pool(path, value)
            before = self._token(path[-1]).balance_of(to)
            self._swap_supporting_fee_on_transfer(path, to)
            received = self._received_at_least(path[-1], to, before, amount_out_min)
        self._log_swap("exact_native_in_fot", path, value, received)
        return received

    def swap_exact_tokens_for_native_supporting_fee_on_transfer(
        self,
        sender: str,
        amount_in: int,
        amount_out_min: int,
        path: Sequence[str],
        to: str,
        deadline: int,
    ) -> int:
        """Exact-input swap into native value; the output is what reached the router."""
        with self._chain.atomic():
            self._ensure(deadline)
            path = self._path(path)
            self._require_ends_native(path)
            self._token(path[0]).transfer_from(
                self.address, sender, self._pool(path[0], path[1]).address, amount_in
            )
            before = self._token(path[-1]).balance_of(self.address)
            self._swap_supporting_fee_on_transfer(path, self.address)
            amount_out = self._received_at_least(path[-1], self.address, before, amount_out_min)
            self._unwrap_to(to, amount_out)
        self._log_swap("exact_in_native_out_fot", path, amount_in, amount_out)
        return amount_out

    # --- Quoting passthroughs ---

    def quote(self, amount_a: int, reserve_a: int, reserve_b: int) -> int:
        return pricing.quote(amount_a, reserve_a, reserve_b)

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        return pricing.get_amount_out(amount_in, reserve_in, reserve_out, self._fee_multiplier)

    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        return pricing.get_amount_in(amount_out, reserve_in, reserve_out, self._fee_multiplier)

    def get_amounts_out(self, amount_in: int, path: Sequence[str]) -> list[int]:
        """Hop amounts for an exact input along deployed pools."""
        return pricing.get_amounts_out(
            amount_in, self._path(path), self._get_reserves, self._fee_multiplier
        )

    def get_amounts_in(self, amount_out: int, path: Sequence[str]) -> list[int]:
        """Hop amounts for an exact output along deployed pools."""
        return pricing.get_amounts_in(
            amount_out, self._path(path), self._get_reserves, self._fee_multiplier
        )


__all__ = ["Router"]
