"""Pool-share token.

Each pool is also a fungible token whose units are claims on a
proportional slice of the pool's reserves. Besides the usual transfer /
approve surface it supports signature-based approvals (permit): a holder
signs an EIP-712 message off-ledger and anyone can submit it.
"""

from __future__ import annotations

from eth_abi import encode
from eth_utils import keccak

from pairswap.chain.capabilities import SignatureVerifier
from pairswap.chain.host import Chain
from pairswap.config import DEFAULT_ENGINE_CONFIG, EngineConfig
from pairswap.constants import (
    EIP712_DOMAIN_TYPEHASH,
    PERMIT_TYPEHASH,
    UINT256_MAX,
    ZERO_ADDRESS,
)
from pairswap.errors import AuthorizationError, EconomicError, ErrorCode, PreconditionError
from pairswap.models.events import Approval, Transfer
from pairswap.models.types import address_to_bytes, normalize_address


class PoolShareToken:
    """Fungible claim token with EIP-712 permits.

    Args:
        chain: Host the token lives on
        address: The token (pool) address
        config: Supplies name, symbol and chain id
        verifier: Signature recovery used by permit; without one every
            permit is rejected
    """

    decimals = 18

    def __init__(
        self,
        chain: Chain,
        address: str,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        verifier: SignatureVerifier | None = None,
    ) -> None:
        self._chain = chain
        self._verifier = verifier
        self.address = normalize_address(address)
        self.name = config.share_name
        self.symbol = config.share_symbol
        self.total_supply = 0
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}
        self._nonces: dict[str, int] = {}
        self.domain_separator = keccak(
            encode(
                ["bytes32", "bytes32", "bytes32", "uint256", "address"],
                [
                    EIP712_DOMAIN_TYPEHASH,
                    keccak(text=self.name),
                    keccak(text="1"),
                    config.chain_id,
                    address_to_bytes(self.address),
                ],
            )
        )

    def balance_of(self, owner: str) -> int:
        return self._balances.get(normalize_address(owner), 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((normalize_address(owner), normalize_address(spender)), 0)

    def nonces(self, owner: str) -> int:
        """Next permit nonce of `owner`."""
        return self._nonces.get(normalize_address(owner), 0)

    # --- Internal supply and balance moves ---

    def _mint(self, to: str, value: int) -> None:
        self._chain.set_attr(self, "total_supply", self.total_supply + value)
        self._chain.write(self._balances, to, self.balance_of(to) + value)
        self._chain.emit(Transfer(self.address, ZERO_ADDRESS, to, value))

    def _burn(self, owner: str, value: int) -> None:
        balance = self.balance_of(owner)
        if balance < value:
            raise EconomicError(ErrorCode.INSUFFICIENT_BALANCE, f"shares {balance} < {value}")
        self._chain.write(self._balances, owner, balance - value)
        self._chain.set_attr(self, "total_supply", self.total_supply - value)
        self._chain.emit(Transfer(self.address, owner, ZERO_ADDRESS, value))

    def _approve(self, owner: str, spender: str, value: int) -> None:
        self._chain.write(self._allowances, (owner, spender), value)
        self._chain.emit(Approval(self.address, owner, spender, value))

    def _transfer(self, sender: str, to: str, value: int) -> None:
        balance = self.balance_of(sender)
        if value < 0 or balance < value:
            raise EconomicError(ErrorCode.INSUFFICIENT_BALANCE, f"shares {balance} < {value}")
        self._chain.write(self._balances, sender, balance - value)
        self._chain.write(self._balances, to, self.balance_of(to) + value)
        self._chain.emit(Transfer(self.address, sender, to, value))

    # --- Fungible surface ---

    def approve(self, sender: str, spender: str, value: int) -> bool:
        with self._chain.atomic():
            self._approve(normalize_address(sender), normalize_address(spender), value)
        return True

    def transfer(self, sender: str, to: str, value: int) -> bool:
        with self._chain.atomic():
            self._transfer(normalize_address(sender), normalize_address(to), value)
        return True

    def transfer_from(self, spender: str, owner: str, to: str, value: int) -> bool:
        """Move shares on behalf of `owner`; an allowance of 2**256-1 never decreases."""
        with self._chain.atomic():
            owner = normalize_address(owner)
            spender = normalize_address(spender)
            allowed = self.allowance(owner, spender)
            if allowed != UINT256_MAX:
                if allowed < value:
                    raise EconomicError(ErrorCode.INSUFFICIENT_ALLOWANCE, f"{allowed} < {value}")
                self._chain.write(self._allowances, (owner, spender), allowed - value)
            self._transfer(owner, normalize_address(to), value)
        return True

    # --- Permit ---

    def permit_digest(self, owner: str, spender: str, value: int, nonce: int, deadline: int) -> bytes:
        """EIP-712 digest a holder signs to approve `spender`."""
        struct_hash = keccak(
            encode(
                ["bytes32", "address", "address", "uint256", "uint256", "uint256"],
                [
                    PERMIT_TYPEHASH,
                    address_to_bytes(owner),
                    address_to_bytes(spender),
                    value,
                    nonce,
                    deadline,
                ],
            )
        )
        return keccak(b"\x19\x01" + self.domain_separator + struct_hash)

    def permit(self, owner: str, spender: str, value: int, deadline: int, signature: bytes) -> None:
        """Grant an allowance from a signed approval.

        Raises:
            PreconditionError: EXPIRED if the deadline has passed
            AuthorizationError: INVALID_SIGNATURE if the recovered signer is
                not `owner` (or nothing could be recovered)
        """
        with self._chain.atomic():
            if deadline < self._chain.timestamp:
                raise PreconditionError(ErrorCode.EXPIRED, "permit deadline passed")
            owner = normalize_address(owner)
            spender = normalize_address(spender)
            nonce = self.nonces(owner)
            digest = self.permit_digest(owner, spender, value, nonce, deadline)
            recovered = ZERO_ADDRESS
            if self._verifier is not None:
                recovered = normalize_address(self._verifier.recover(digest, signature))
            if recovered == ZERO_ADDRESS or recovered != owner:
                raise AuthorizationError(ErrorCode.INVALID_SIGNATURE)
            self._chain.write(self._nonces, owner, nonce + 1)
            self._approve(owner, spender, value)
