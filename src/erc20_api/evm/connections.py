"""Connection helpers for the EVM transfer client."""

from __future__ import annotations

import logging
import string
from typing import cast

import requests
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import HTTPProvider, Web3
from web3.contract import Contract
from web3.types import ChecksumAddress

from ..abi import build_token_contract, load_abi
from ..exceptions import ERC20ProtocolError, NetworkError, ValidationError
from ..utils import validate_address
from .config import TokenClientConfig

logger = logging.getLogger(__name__)

_PRIVATE_KEY_HEX_LENGTH = 64


def normalise_private_key(private_key: str) -> str:
    """Return a ``0x``-prefixed 32 byte hex key or raise ValidationError."""

    if not isinstance(private_key, str):
        raise ValidationError("Private key must be a hex string", field="private_key")

    raw = private_key.strip()
    if raw[:2].lower() == "0x":
        raw = raw[2:]

    if len(raw) != _PRIVATE_KEY_HEX_LENGTH or any(c not in string.hexdigits for c in raw):
        # never echo key material back in the error
        raise ValidationError(
            "Private key must be 32 bytes of hex",
            field="private_key",
            details={"length": len(raw)},
        )

    return "0x" + raw


class Web3Connections:
    """Manage the Web3 provider, signer account and token contract for one client."""

    def __init__(self, config: TokenClientConfig, session: requests.Session | None = None):
        self.config = config
        self._session = session
        self._provider: HTTPProvider | None = None
        self._web3: Web3 | None = None
        self._account: LocalAccount | None = None
        self._token_contract: Contract | None = None
        self._chain_id: int | None = None
        self._connected = False
        self._contract_address: ChecksumAddress = validate_address(
            config.contract_address, field="contract_address", label="contract"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def connect(self) -> None:
        """Parse the ABI, dial the node, bind the token contract, load the key
        and read the chain id.

        Either every step succeeds or the connection is left fully reset.
        """

        try:
            self._connect()
        except ERC20ProtocolError:
            self.disconnect()
            raise

    def _connect(self) -> None:
        abi_entries = load_abi(self.config.abi)

        provider, web3 = self._build_web3_provider(self.config.rpc_url)
        self._provider = provider
        self._web3 = web3
        self._token_contract = build_token_contract(web3, self._contract_address, abi_entries)

        key = normalise_private_key(self.config.private_key)
        try:
            signer = cast(LocalAccount, Account.from_key(key))
        except Exception as exc:
            raise ValidationError(
                "Failed to derive signer account from provided private key",
                field="private_key",
                details={"error": str(exc)},
            ) from exc
        self._account = signer

        try:
            self._chain_id = int(web3.eth.chain_id)
        except Exception as exc:
            raise NetworkError(
                "Failed to read chain id",
                endpoint=self.config.rpc_url,
                details={"error": str(exc)},
            ) from exc

        self._connected = True
        logger.info(
            "Connected to RPC at %s (chain_id=%s, sender=%s, contract=%s)",
            self.config.rpc_url,
            self._chain_id,
            signer.address,
            self._contract_address,
        )

    def disconnect(self) -> None:
        self._provider = None
        self._web3 = None
        self._account = None
        self._token_contract = None
        self._chain_id = None
        self._connected = False

    def is_connected(self) -> bool:
        return self._connected and self._web3 is not None and self._account is not None

    def ensure_connected(self) -> None:
        if not self.is_connected():
            raise NetworkError("EVM connector is not connected", endpoint=self.config.rpc_url)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def web3(self) -> Web3:
        if self._web3 is None:
            raise NetworkError("RPC provider not connected", endpoint=self.config.rpc_url)
        return self._web3

    @property
    def account(self) -> LocalAccount:
        if self._account is None:
            raise NetworkError(
                "Signer account is not initialised; call connect() first",
                endpoint=self.config.rpc_url,
            )
        return self._account

    @property
    def token_contract(self) -> Contract:
        if self._token_contract is None:
            raise NetworkError(
                "Token contract not available; call connect() first",
                endpoint=self.config.rpc_url,
            )
        return self._token_contract

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            raise NetworkError("Chain id not available", endpoint=self.config.rpc_url)
        return self._chain_id

    @property
    def contract_address(self) -> ChecksumAddress:
        return self._contract_address

    @property
    def sender_address(self) -> ChecksumAddress:
        return self.account.address

    # ------------------------------------------------------------------
    # Internal wiring
    # ------------------------------------------------------------------
    def _build_web3_provider(self, rpc_url: str) -> tuple[HTTPProvider, Web3]:
        try:
            provider = HTTPProvider(
                rpc_url,
                request_kwargs={"timeout": self.config.request_timeout},
                session=self._session,
                exception_retry_configuration=None,
            )
        except Exception as exc:
            raise NetworkError(
                "Invalid RPC endpoint", endpoint=rpc_url, details={"error": str(exc)}
            ) from exc

        web3 = Web3(provider)
        if not web3.is_connected():
            raise NetworkError("Unable to connect to RPC", endpoint=rpc_url)
        return provider, web3
