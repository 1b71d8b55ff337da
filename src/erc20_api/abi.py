"""ERC-20 ABI description and contract call encoding."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from hexbytes import HexBytes
from web3 import Web3
from web3.contract import Contract
from web3.types import ChecksumAddress

from .exceptions import ConfigurationError, TransactionError

logger = logging.getLogger(__name__)

ERC20_ABI = json.dumps(
    [
        {
            "constant": False,
            "inputs": [
                {"name": "_to", "type": "address"},
                {"name": "_value", "type": "uint256"},
            ],
            "name": "transfer",
            "outputs": [{"name": "", "type": "bool"}],
            "payable": False,
            "stateMutability": "nonpayable",
            "type": "function",
        },
        {
            "constant": False,
            "inputs": [
                {"name": "_from", "type": "address"},
                {"name": "_to", "type": "address"},
                {"name": "_value", "type": "uint256"},
            ],
            "name": "transferFrom",
            "outputs": [{"name": "", "type": "bool"}],
            "payable": False,
            "stateMutability": "nonpayable",
            "type": "function",
        },
    ]
)

TRANSFER_SIGNATURE = "transfer(address,uint256)"
TRANSFER_FROM_SIGNATURE = "transferFrom(address,address,uint256)"
REQUIRED_SIGNATURES = (TRANSFER_SIGNATURE, TRANSFER_FROM_SIGNATURE)


def load_abi(abi: str | Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Return ABI entries from JSON text or an already parsed list.

    Raises:
        ConfigurationError: If the text is not JSON or not a list of objects
    """
    if isinstance(abi, str):
        try:
            entries = json.loads(abi)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                "Failed to parse contract ABI", details={"error": str(exc)}
            ) from exc
    else:
        entries = list(abi)

    if not isinstance(entries, list) or not all(isinstance(item, Mapping) for item in entries):
        raise ConfigurationError("Contract ABI must be a JSON list of objects")

    return [dict(item) for item in entries]


def build_token_contract(
    web3: Web3, address: ChecksumAddress, abi: str | Sequence[Mapping[str, Any]]
) -> Contract:
    """Bind the ABI to the token address and check the ERC-20 transfer functions exist."""

    entries = load_abi(abi)
    try:
        contract = web3.eth.contract(address=address, abi=entries)
    except Exception as exc:
        raise ConfigurationError(
            "Invalid contract ABI", details={"error": str(exc)}
        ) from exc

    missing = []
    for signature in REQUIRED_SIGNATURES:
        try:
            contract.get_function_by_signature(signature)
        except Exception:
            missing.append(signature)
    if missing:
        raise ConfigurationError(
            "Contract ABI is missing required functions", details={"missing": missing}
        )

    logger.debug("Bound token ABI to %s", address)
    return contract


def encode_call(contract: Contract, function_name: str, args: Sequence[Any]) -> bytes:
    """Return the 4-byte selector followed by the ABI-encoded arguments.

    Overloads are resolved by web3 from the argument count and types.
    """
    try:
        data = contract.encode_abi(function_name, args=list(args))
    except Exception as exc:
        raise TransactionError(
            f"Failed to encode {function_name} call: {exc}",
            step="encode",
            details={"function": function_name, "args": list(args), "error": str(exc)},
        ) from exc

    return bytes(HexBytes(data))
