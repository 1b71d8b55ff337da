from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from eth_account import Account
from hexbytes import HexBytes
from web3 import Web3

from erc20_api.evm.client import ERC20Client
from erc20_api.evm.config import TokenClientConfig
from erc20_api.evm.connections import Web3Connections

PRIVATE_KEY = "11" * 32
CONTRACT = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
OFFLINE_WEB3 = Web3()


class DummyEth:
    """Stand-in for ``web3.eth`` that records every RPC it receives."""

    def __init__(self) -> None:
        self.chain_id_value = 1
        self.nonce = 7
        self.gas_price_value = 2_000_000_000
        self.gas_estimate = 51_234
        self.chain_id_error: Exception | None = None
        self.nonce_error: Exception | None = None
        self.gas_price_error: Exception | None = None
        self.estimate_error: Exception | None = None
        self.send_error: Exception | None = None
        self.calls: list[tuple[str, Any]] = []
        self.sent: list[bytes] = []
        self.on_nonce: Any = None

    @property
    def chain_id(self) -> int:
        self.calls.append(("chain_id", None))
        if self.chain_id_error is not None:
            raise self.chain_id_error
        return self.chain_id_value

    def get_transaction_count(self, address: str, block: str) -> int:
        self.calls.append(("get_transaction_count", (address, block)))
        if self.on_nonce is not None:
            self.on_nonce()
        if self.nonce_error is not None:
            raise self.nonce_error
        return self.nonce

    @property
    def gas_price(self) -> int:
        self.calls.append(("gas_price", None))
        if self.gas_price_error is not None:
            raise self.gas_price_error
        return self.gas_price_value

    def estimate_gas(self, tx: dict[str, Any]) -> int:
        self.calls.append(("estimate_gas", dict(tx)))
        if self.estimate_error is not None:
            raise self.estimate_error
        return self.gas_estimate

    def send_raw_transaction(self, raw: bytes) -> HexBytes:
        self.calls.append(("send_raw_transaction", bytes(raw)))
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(bytes(raw))
        return HexBytes(Web3.keccak(raw))

    def contract(self, address: str, abi: Any) -> Any:
        # contract handles only need the codec, never the provider
        return OFFLINE_WEB3.eth.contract(address=address, abi=abi)

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


class RecordingAccount:
    """Wrap a LocalAccount and keep every transaction it signs."""

    def __init__(self, account: Any) -> None:
        self._account = account
        self.address = account.address
        self.params: list[dict[str, Any]] = []
        self.signed: list[Any] = []

    def sign_transaction(self, tx: dict[str, Any]) -> Any:
        self.params.append(dict(tx))
        signed = self._account.sign_transaction(tx)
        self.signed.append(signed)
        return signed


@pytest.fixture
def eth(monkeypatch: pytest.MonkeyPatch) -> DummyEth:
    dummy = DummyEth()

    def _build(self: Web3Connections, rpc_url: str) -> tuple[None, Any]:
        return None, SimpleNamespace(eth=dummy)

    monkeypatch.setattr(Web3Connections, "_build_web3_provider", _build)
    return dummy


@pytest.fixture
def signer() -> Any:
    return Account.from_key("0x" + PRIVATE_KEY)


def make_client(decimals: int = 18, abi: str | None = None) -> ERC20Client:
    extra = {"abi": abi} if abi is not None else {}
    config = TokenClientConfig(
        rpc_url="http://node.invalid",
        private_key=PRIVATE_KEY,
        contract_address=CONTRACT,
        decimals=decimals,
        **extra,
    )
    return ERC20Client.from_config(config)


@pytest.fixture
def client_factory(eth: DummyEth):
    """Return a factory building connected clients with a recording signer."""

    def _factory(
        decimals: int = 18, abi: str | None = None
    ) -> tuple[ERC20Client, RecordingAccount]:
        client = make_client(decimals, abi)
        recorder = RecordingAccount(client._connections.account)
        client._connections._account = recorder  # type: ignore[assignment]
        return client, recorder

    return _factory
