"""Tests for erc20_api.abi contract binding and call encoding."""

import json

import pytest
from eth_abi import encode as abi_encode
from web3 import Web3

from erc20_api.abi import ERC20_ABI, build_token_contract, encode_call, load_abi
from erc20_api.exceptions import ConfigurationError, TransactionError

TO = "0x52908400098527886E0F7030069857D2E4169EE7"
FROM = "0x8617E340B3D01FA5F11F306F4090FD50E238070D"
CONTRACT = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"

TRANSFER_SELECTOR = bytes.fromhex("a9059cbb")
TRANSFER_FROM_SELECTOR = bytes.fromhex("23b872dd")

# ERC-223 style overload listed ahead of the standard entry
TRANSFER_WITH_DATA = {
    "inputs": [
        {"name": "_to", "type": "address"},
        {"name": "_value", "type": "uint256"},
        {"name": "_data", "type": "bytes"},
    ],
    "name": "transfer",
    "outputs": [{"name": "", "type": "bool"}],
    "stateMutability": "nonpayable",
    "type": "function",
}


@pytest.fixture
def web3() -> Web3:
    return Web3()


def test_encode_transfer(web3) -> None:
    contract = build_token_contract(web3, CONTRACT, ERC20_ABI)

    data = encode_call(contract, "transfer", [TO, 10**19])

    assert data == TRANSFER_SELECTOR + abi_encode(["address", "uint256"], [TO, 10**19])


def test_encode_transfer_from_and_decode(web3) -> None:
    contract = build_token_contract(web3, CONTRACT, ERC20_ABI)

    data = encode_call(contract, "transferFrom", [FROM, TO, 5_000_000])

    assert data[:4] == TRANSFER_FROM_SELECTOR
    function, params = contract.decode_function_input(data)
    assert function.fn_name == "transferFrom"
    assert params["_from"].lower() == FROM.lower()
    assert params["_to"].lower() == TO.lower()
    assert params["_value"] == 5_000_000


def test_overloaded_transfer_resolves_standard_entry(web3) -> None:
    entries = [TRANSFER_WITH_DATA] + json.loads(ERC20_ABI)
    contract = build_token_contract(web3, CONTRACT, json.dumps(entries))

    data = encode_call(contract, "transfer", [TO, 10**18])

    assert data == TRANSFER_SELECTOR + abi_encode(["address", "uint256"], [TO, 10**18])


def test_encode_failure_is_a_transaction_error(web3) -> None:
    contract = build_token_contract(web3, CONTRACT, ERC20_ABI)

    with pytest.raises(TransactionError) as excinfo:
        encode_call(contract, "transfer", [TO])
    assert excinfo.value.step == "encode"


def test_unparsable_abi_text() -> None:
    with pytest.raises(ConfigurationError):
        load_abi("this is not json")


def test_abi_must_be_a_list() -> None:
    with pytest.raises(ConfigurationError):
        load_abi(json.dumps({"name": "transfer"}))


def test_abi_missing_transfer_from(web3) -> None:
    entries = [entry for entry in json.loads(ERC20_ABI) if entry["name"] == "transfer"]

    with pytest.raises(ConfigurationError) as excinfo:
        build_token_contract(web3, CONTRACT, entries)
    assert excinfo.value.details["missing"] == ["transferFrom(address,address,uint256)"]


def test_overload_alone_does_not_satisfy_transfer(web3) -> None:
    entries = [TRANSFER_WITH_DATA] + [
        entry for entry in json.loads(ERC20_ABI) if entry["name"] == "transferFrom"
    ]

    with pytest.raises(ConfigurationError) as excinfo:
        build_token_contract(web3, CONTRACT, entries)
    assert excinfo.value.details["missing"] == ["transfer(address,uint256)"]


def test_abi_with_events_is_accepted(web3) -> None:
    entries = json.loads(ERC20_ABI) + [
        {
            "anonymous": False,
            "inputs": [{"indexed": True, "name": "from", "type": "address"}],
            "name": "Transfer",
            "type": "event",
        }
    ]

    contract = build_token_contract(web3, CONTRACT, entries)

    assert contract.address == CONTRACT
