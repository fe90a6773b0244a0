"""Events emitted by the engine.

Events are appended to the host's event log and share the fate of the
transaction that produced them: a reverted call leaves no events behind.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Event:
    """Base class; `emitter` is the address of the emitting contract."""

    emitter: str


@dataclass(frozen=True)
class PairCreated(Event):
    token0: str
    token1: str
    pool: str
    index: int


@dataclass(frozen=True)
class Transfer(Event):
    sender: str
    to: str
    value: int


@dataclass(frozen=True)
class Approval(Event):
    owner: str
    spender: str
    value: int


@dataclass(frozen=True)
class Mint(Event):
    sender: str
    amount0: int
    amount1: int


@dataclass(frozen=True)
class Burn(Event):
    sender: str
    amount0: int
    amount1: int
    to: str


@dataclass(frozen=True)
class Swap(Event):
    sender: str
    amount0_in: int
    amount1_in: int
    amount0_out: int
    amount1_out: int
    to: str


@dataclass(frozen=True)
class FlashBorrow(Event):
    sender: str
    amount0: int
    amount1: int
    to: str


@dataclass(frozen=True)
class Sync(Event):
    reserve0: int
    reserve1: int


@dataclass(frozen=True)
class Deposit(Event):
    owner: str
    value: int


@dataclass(frozen=True)
class Withdrawal(Event):
    owner: str
    value: int
