"""In-process host environment.

The Chain plays the part of the ledger the engine runs on:

- a clock (the current block timestamp)
- a directory mapping addresses to contract objects
- native-asset balances
- an append-only event log
- transactions: `atomic()` serializes callers and journals every state
  write so a failing call is undone as a unit

Transactions nest. Each `atomic()` level is a savepoint: when an exception
leaves a level, every write journaled since that level began is undone in
reverse order before the exception propagates. A caller that catches the
error keeps the effects of the enclosing levels only.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterator, MutableMapping
from contextlib import contextmanager
from typing import Any, TypeVar

import structlog
from eth_utils import keccak

from pairswap.chain.capabilities import NativeReceiver
from pairswap.errors import (
    AMMError,
    EconomicError,
    ErrorCode,
    InvalidArgumentError,
    PoolLookupError,
)
from pairswap.log_config import short
from pairswap.models.events import Event
from pairswap.models.types import address_from_bytes, normalize_address

logger = structlog.get_logger()

K = TypeVar("K")
V = TypeVar("V")

_MISSING = object()


class Chain:
    """Clock, contract directory, native balances and transaction journal.

    Args:
        chain_id: Identifier bound into signed messages
        timestamp: Initial block timestamp (defaults to wall-clock seconds)
    """

    def __init__(self, chain_id: int = 1, timestamp: int | None = None) -> None:
        self.chain_id = chain_id
        self._timestamp = int(time.time()) if timestamp is None else timestamp
        self._contracts: dict[str, Any] = {}
        self._native: dict[str, int] = {}
        self.events: list[Event] = []
        self._address_nonce = 0
        # Globally ordered execution: one transaction at a time
        self._tx_lock = threading.RLock()
        self._journal: list[Callable[[], None]] = []
        self._depth = 0

    # --- Clock ---

    @property
    def timestamp(self) -> int:
        """Current block timestamp in seconds."""
        return self._timestamp

    def advance(self, seconds: int) -> int:
        """Move the clock forward and return the new timestamp."""
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards: {seconds}")
        self._timestamp += seconds
        return self._timestamp

    def set_timestamp(self, timestamp: int) -> None:
        self._timestamp = timestamp

    # --- Transactions ---

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Run a block as an all-or-nothing unit.

        Re-entrant: nested blocks join the enclosing transaction as savepoints.
        """
        with self._tx_lock:
            mark = len(self._journal)
            self._depth += 1
            try:
                yield
            except BaseException as exc:
                self._rollback_to(mark)
                if self._depth == 1 and isinstance(exc, AMMError):
                    logger.info(
                        "transaction_reverted",
                        code=exc.code.value,
                        category=exc.category.value,
                        detail=exc.detail,
                    )
                raise
            finally:
                self._depth -= 1
                if self._depth == 0:
                    self._journal.clear()

    def _rollback_to(self, mark: int) -> None:
        while len(self._journal) > mark:
            undo = self._journal.pop()
            undo()

    def record(self, undo: Callable[[], None]) -> None:
        """Journal an undo action for the current transaction.

        Outside a transaction writes are final and nothing is recorded.
        """
        if self._depth > 0:
            self._journal.append(undo)

    def write(self, mapping: MutableMapping[K, V], key: K, value: V) -> None:
        """Journaled `mapping[key] = value`."""
        previous = mapping.get(key, _MISSING)  # type: ignore[arg-type]
        mapping[key] = value

        def undo() -> None:
            if previous is _MISSING:
                mapping.pop(key, None)
            else:
                mapping[key] = previous  # type: ignore[assignment]

        self.record(undo)

    def set_attr(self, obj: object, name: str, value: object) -> None:
        """Journaled `setattr(obj, name, value)`."""
        previous = getattr(obj, name)
        setattr(obj, name, value)
        self.record(lambda: setattr(obj, name, previous))

    def emit(self, event: Event) -> None:
        """Append an event; it disappears if the transaction reverts."""
        self.events.append(event)
        self.record(self.events.pop)

    def events_of(self, kind: type[Event], emitter: str | None = None) -> list[Event]:
        """Events of one type, optionally filtered by emitting contract."""
        return [
            e
            for e in self.events
            if isinstance(e, kind) and (emitter is None or e.emitter == emitter)
        ]

    # --- Contract directory ---

    def new_address(self, label: str = "account") -> str:
        """Fresh deterministic address for accounts and plain deployments."""
        self._address_nonce += 1
        return address_from_bytes(keccak(text=f"{label}:{self._address_nonce}")[12:])

    def deploy(self, contract: Any) -> str:
        """Register a contract under its `address` attribute.

        Raises:
            PoolLookupError: ALREADY_EXISTS if the address is taken
        """
        address = normalize_address(contract.address)
        if address in self._contracts:
            raise PoolLookupError(ErrorCode.ALREADY_EXISTS, f"contract at {address}")
        self.write(self._contracts, address, contract)
        logger.debug("contract_deployed", address=short(address), kind=type(contract).__name__)
        return address

    def has_contract(self, address: str) -> bool:
        return normalize_address(address) in self._contracts

    def contract_at(self, address: str) -> Any:
        """Resolve an address to its contract object.

        Raises:
            PoolLookupError: CONTRACT_NOT_FOUND if nothing is deployed there
        """
        try:
            return self._contracts[normalize_address(address)]
        except KeyError:
            raise PoolLookupError(ErrorCode.CONTRACT_NOT_FOUND, address) from None

    # --- Native asset ---

    def native_balance(self, owner: str) -> int:
        return self._native.get(normalize_address(owner), 0)

    def fund_native(self, owner: str, value: int) -> None:
        """Credit native balance out of thin air (genesis allocation)."""
        if value < 0:
            raise InvalidArgumentError(ErrorCode.INVALID_AMOUNT, str(value))
        owner = normalize_address(owner)
        self.write(self._native, owner, self._native.get(owner, 0) + value)

    def attach_value(self, sender: str, to: str, value: int) -> None:
        """Move native value that accompanies a call (no receive hook)."""
        with self.atomic():
            self._move_native(sender, to, value)

    def send_native(self, sender: str, to: str, value: int) -> None:
        """Plain native transfer; contracts implementing receive_native may reject it."""
        with self.atomic():
            self._move_native(sender, to, value)
            recipient = self._contracts.get(normalize_address(to))
            if isinstance(recipient, NativeReceiver):
                recipient.receive_native(normalize_address(sender), value)

    def _move_native(self, sender: str, to: str, value: int) -> None:
        if value < 0:
            raise InvalidArgumentError(ErrorCode.INVALID_AMOUNT, str(value))
        sender = normalize_address(sender)
        to = normalize_address(to)
        balance = self._native.get(sender, 0)
        if balance < value:
            raise EconomicError(ErrorCode.INSUFFICIENT_BALANCE, f"native {balance} < {value}")
        self.write(self._native, sender, balance - value)
        self.write(self._native, to, self._native.get(to, 0) + value)
