"""Collaborator capabilities consumed by the engine.

Pools and routers only talk to assets, the native wrapper, signature
recovery and flash-swap borrowers through these protocols; any object
with matching methods can be plugged in.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Fungible(Protocol):
    """A fungible asset ledger."""

    address: str

    def balance_of(self, owner: str) -> int: ...

    def transfer(self, sender: str, to: str, value: int) -> bool: ...

    def transfer_from(self, spender: str, owner: str, to: str, value: int) -> bool: ...


@runtime_checkable
class NativeWrapper(Fungible, Protocol):
    """Fungible wrapper around the host's native asset."""

    def deposit(self, sender: str, value: int) -> None: ...

    def withdraw(self, sender: str, value: int) -> None: ...


class SignatureVerifier(Protocol):
    """Opaque signature recovery: digest + signature -> signer address.

    Implementations return the zero address when nothing can be recovered.
    """

    def recover(self, digest: bytes, signature: bytes) -> str: ...


@runtime_checkable
class SwapCallee(Protocol):
    """Borrower invoked in the middle of a flash swap or flash borrow."""

    def on_swap_callback(
        self, sender: str, amount0_out: int, amount1_out: int, data: bytes
    ) -> None: ...


@runtime_checkable
class NativeReceiver(Protocol):
    """Contract that wants a say in plain native transfers sent to it."""

    def receive_native(self, sender: str, value: int) -> None: ...


__all__ = [
    "Fungible",
    "NativeWrapper",
    "NativeReceiver",
    "SignatureVerifier",
    "SwapCallee",
]
