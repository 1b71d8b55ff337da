"""Transaction build, sign and submit pipeline for the EVM transfer client."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from contextlib import nullcontext
from typing import Any, TypeVar

from hexbytes import HexBytes

from ..exceptions import TransactionError
from ..types import TxCall, UnsignedTransaction
from .connections import Web3Connections

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TransactionDispatcher:
    """Run every transfer through nonce, gas, sign and broadcast steps.

    With ``serialize_nonces`` the span from nonce lookup to broadcast is held
    under a lock, so concurrent sends through the same dispatcher never pick
    the same pending nonce.
    """

    def __init__(self, connections: Web3Connections, *, serialize_nonces: bool = True) -> None:
        self._connections = connections
        self._lock: threading.Lock | None = threading.Lock() if serialize_nonces else None

    def send(self, call: TxCall) -> dict[str, Any]:
        self._connections.ensure_connected()

        web3 = self._connections.web3
        account = self._connections.account
        chain_id = self._connections.chain_id
        sender = account.address
        action = call.kind.value

        with self._lock if self._lock is not None else nullcontext():
            nonce = self._step(
                "nonce", lambda: web3.eth.get_transaction_count(sender, "pending")
            )
            gas_price = self._step("gas_price", lambda: web3.eth.gas_price)

            if call.gas_limit is not None:
                gas_limit = call.gas_limit
            else:
                gas_limit = self._step(
                    "estimate_gas",
                    lambda: web3.eth.estimate_gas(
                        {
                            "from": sender,
                            "to": call.to,  # type: ignore[typeddict-item]
                            "value": call.value,  # type: ignore[typeddict-item]
                            "data": call.data,
                        }
                    ),
                )

            tx = UnsignedTransaction(
                nonce=int(nonce),
                to=call.to,
                value=call.value,
                gas=int(gas_limit),
                gas_price=int(gas_price),
                data=call.data,
            )
            logger.debug(
                "Built %s transaction nonce=%s gas=%s gas_price=%s",
                action,
                tx.nonce,
                tx.gas,
                tx.gas_price,
            )

            signed = self._step(
                "sign", lambda: account.sign_transaction(tx.as_tx_params(chain_id))
            )
            tx_hash = self._step(
                "broadcast", lambda: web3.eth.send_raw_transaction(signed.raw_transaction)
            )

        tx_hex = HexBytes(tx_hash).to_0x_hex()
        logger.info("Transaction sent for action=%s hash=%s", action, tx_hex)

        return {
            "tx_hash": tx_hex,
            "action": action,
            "context": dict(call.context),
            "nonce": tx.nonce,
            "gas": tx.gas,
            "gas_price": tx.gas_price,
            "chain_id": chain_id,
        }

    @staticmethod
    def _step(name: str, func: Callable[[], T]) -> T:
        try:
            return func()
        except Exception as exc:
            logger.debug("Transaction step %s failed: %s", name, exc)
            raise TransactionError(
                f"{name} failed: {exc}", step=name, details={"error": str(exc)}
            ) from exc
