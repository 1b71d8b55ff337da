"""EVM implementation that sends native coin and ERC-20 tokens from one key."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

import requests
from web3.types import ChecksumAddress

from ..abi import encode_call
from ..base import TokenProtocolBase
from ..constants import (
    DEFAULT_TOKEN_DECIMALS,
    MAX_DECIMALS,
    NATIVE_DECIMALS,
    TRANSFER_FROM_FUNCTION,
    TRANSFER_FUNCTION,
)
from ..exceptions import ERC20ProtocolError, ValidationError
from ..types import Response, TransferKind, TransferRequest, TxCall
from ..utils import Amount, to_fixed_point, validate_address, validate_amount
from .config import DEFAULT_REQUEST_TIMEOUT, TokenClientConfig
from .connections import Web3Connections
from .transactions import TransactionDispatcher

logger = logging.getLogger(__name__)


class ERC20Client(TokenProtocolBase):
    """Sign and submit native and ERC-20 transfers for a single private key."""

    def __init__(
        self,
        rpc_url: str,
        private_key: str,
        contract_address: str,
        decimals: int = DEFAULT_TOKEN_DECIMALS,
        *,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
        serialize_nonces: bool = True,
        abi: str | None = None,
    ) -> None:
        if isinstance(decimals, bool) or not isinstance(decimals, int):
            raise ValidationError("Decimals must be an integer", field="decimals", value=decimals)
        if decimals < 0 or decimals > MAX_DECIMALS:
            raise ValidationError(
                f"Decimals must be between 0 and {MAX_DECIMALS}", field="decimals", value=decimals
            )

        config_kwargs: dict[str, Any] = {}
        if abi is not None:
            config_kwargs["abi"] = abi

        config = TokenClientConfig(
            rpc_url=rpc_url,
            private_key=private_key,
            contract_address=contract_address,
            decimals=decimals,
            request_timeout=request_timeout,
            serialize_nonces=serialize_nonces,
            **config_kwargs,
        )

        self._config = config
        self._session = requests.Session()
        self._connections = Web3Connections(config, self._session)
        self._dispatcher = TransactionDispatcher(
            self._connections, serialize_nonces=config.serialize_nonces
        )
        self._decimals = decimals

    @classmethod
    def from_config(cls, config: TokenClientConfig, *, connect: bool = True) -> ERC20Client:
        """Build a client from a config and, by default, connect it.

        Raises instead of returning a half-initialised client.
        """

        client = cls(
            config.rpc_url,
            config.private_key,
            config.contract_address,
            config.decimals,
            request_timeout=config.request_timeout,
            serialize_nonces=config.serialize_nonces,
            abi=config.abi,
        )
        if connect:
            client.connect()
        return client

    # ------------------------------------------------------------------
    # Connection management
    # ------------------------------------------------------------------
    def connect(self) -> None:
        self._connections.connect()

    def disconnect(self) -> None:
        self._connections.disconnect()

    def is_connected(self) -> bool:
        return self._connections.is_connected()

    @property
    def rpc_url(self) -> str:
        return self._config.rpc_url

    @property
    def decimals(self) -> int:
        return self._decimals

    @property
    def contract_address(self) -> ChecksumAddress:
        return self._connections.contract_address

    @property
    def sender_address(self) -> ChecksumAddress:
        return self._connections.sender_address

    @property
    def chain_id(self) -> int:
        return self._connections.chain_id

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------
    def send_to(self, to: str, amount: Amount) -> Response:
        """Send native coin; ``amount`` is in whole coins (18 decimals)."""
        return self._transfer(TransferRequest(TransferKind.NATIVE, to, amount))

    def erc20_send_to(self, to: str, amount: Amount) -> Response:
        """Call ``transfer(to, amount)`` on the token contract."""
        return self._transfer(TransferRequest(TransferKind.TOKEN_TRANSFER, to, amount))

    def erc20_send_from(self, sender: str, to: str, amount: Amount) -> Response:
        """Call ``transferFrom(sender, to, amount)`` using an allowance held by us."""
        return self._transfer(
            TransferRequest(TransferKind.TOKEN_TRANSFER_FROM, to, amount, sender=sender)
        )

    def _transfer(self, request: TransferRequest) -> Response:
        action = request.kind.value
        try:
            call, amount, units = self._prepare_call(request)
            tx_result = self._dispatcher.send(call)
        except ERC20ProtocolError as exc:
            logger.error("%s failed: %s", action, exc)
            return Response(
                success=False,
                error=str(exc),
                kind=request.kind,
                recipient=request.to,
                sender=request.sender,
            )
        except Exception as exc:
            logger.exception(f"Unexpected {action} failure")
            return Response(success=False, error=str(exc), kind=request.kind)

        return Response(
            success=True,
            transaction_hash=tx_result["tx_hash"],
            raw_response=tx_result,
            kind=request.kind,
            amount=amount,
            amount_units=units,
            recipient=call.context.get("to"),
            sender=call.context.get("from"),
            nonce=tx_result["nonce"],
        )

    def _prepare_call(self, request: TransferRequest) -> tuple[TxCall, Decimal, int]:
        """Validate a request and turn it into a pipeline call.

        Validation runs before any RPC so bad input never reaches the node.
        """

        sender = None
        if request.kind is TransferKind.TOKEN_TRANSFER_FROM:
            sender = validate_address(request.sender, field="from")
        to = validate_address(request.to, field="to")
        amount = validate_amount(request.amount)

        if request.kind is TransferKind.NATIVE:
            units = self._to_units(amount, NATIVE_DECIMALS)
            context = {"to": to, "amount_units": units}
            return TxCall.native(to, units, context), amount, units

        units = self._to_units(amount, self._decimals)
        contract = self._connections.token_contract
        if request.kind is TransferKind.TOKEN_TRANSFER:
            data = encode_call(contract, TRANSFER_FUNCTION, [to, units])
            context = {"to": to, "amount_units": units}
        else:
            data = encode_call(contract, TRANSFER_FROM_FUNCTION, [sender, to, units])
            context = {"from": sender, "to": to, "amount_units": units}

        logger.info(
            "Dispatching %s of %s units to %s via %s",
            request.kind.value,
            units,
            to,
            self.contract_address,
        )
        return TxCall.contract(request.kind, self.contract_address, data, context), amount, units

    @staticmethod
    def _to_units(amount: Decimal, scale: int) -> int:
        units = to_fixed_point(amount, scale)
        if units == 0:
            raise ValidationError(
                f"Amount is below the smallest unit at {scale} decimals",
                field="amount",
                value=amount,
            )
        return units
