"""Type definitions and data models for the ERC-20 transfer API."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from web3.types import TxParams, Wei

from .constants import NATIVE_TRANSFER_GAS


class TransferKind(Enum):
    """The three supported value transfers."""

    NATIVE = "native"
    TOKEN_TRANSFER = "transfer"
    TOKEN_TRANSFER_FROM = "transferFrom"


Address = str  # Ethereum address


@dataclass(frozen=True)
class TransferRequest:
    """A single caller request, before validation."""

    kind: TransferKind
    to: Address
    amount: Decimal | int | float | str
    sender: Address | None = None


@dataclass(frozen=True)
class TxCall:
    """What differs between a native transfer and a token contract call.

    ``gas_limit`` is fixed for native transfers and ``None`` for contract
    calls, which have their gas estimated by the node.
    """

    kind: TransferKind
    to: str
    value: int = 0
    data: bytes = b""
    gas_limit: int | None = None
    context: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def native(cls, to: str, value: int, context: dict[str, Any] | None = None) -> "TxCall":
        return cls(
            kind=TransferKind.NATIVE,
            to=to,
            value=value,
            data=b"",
            gas_limit=NATIVE_TRANSFER_GAS,
            context=dict(context or {}),
        )

    @classmethod
    def contract(
        cls,
        kind: TransferKind,
        contract: str,
        data: bytes,
        context: dict[str, Any] | None = None,
    ) -> "TxCall":
        return cls(
            kind=kind,
            to=contract,
            value=0,
            data=data,
            gas_limit=None,
            context=dict(context or {}),
        )


@dataclass(frozen=True)
class UnsignedTransaction:
    """Legacy transaction fields, before the EIP-155 signature."""

    nonce: int
    to: str
    value: int
    gas: int
    gas_price: int
    data: bytes = b""

    def as_tx_params(self, chain_id: int) -> TxParams:
        """Return web3 transaction params; ``chainId`` selects EIP-155 signing."""

        return {
            "nonce": self.nonce,
            "to": self.to,  # type: ignore[typeddict-item]
            "value": Wei(self.value),
            "gas": self.gas,
            "gasPrice": Wei(self.gas_price),
            "data": self.data,
            "chainId": chain_id,
        }


@dataclass
class Response:
    """Generic response for all transfer operations."""

    success: bool
    transaction_hash: str | None = None
    error: str | None = None
    raw_response: dict[str, Any] | None = None
    kind: TransferKind | None = None
    amount: Decimal | None = None
    amount_units: int | None = None
    recipient: str | None = None
    sender: str | None = None
    nonce: int | None = None
