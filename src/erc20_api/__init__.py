"""ERC-20 transfer API.

Sign and submit native coin transfers and ERC-20 ``transfer`` /
``transferFrom`` calls on any EIP-155 chain from a single private key.
"""

from .abi import ERC20_ABI, build_token_contract, encode_call, load_abi
from .base import TokenProtocolBase
from .constants import NATIVE_DECIMALS, NATIVE_TRANSFER_GAS
from .evm import ERC20Client, TokenClientConfig
from .exceptions import (
    ConfigurationError,
    ERC20ProtocolError,
    NetworkError,
    TransactionError,
    ValidationError,
)
from .types import (
    Address,
    Response,
    TransferKind,
    TransferRequest,
    TxCall,
    UnsignedTransaction,
)
from .utils import (
    from_fixed_point,
    is_hex_address,
    to_fixed_point,
    validate_address,
    validate_amount,
)

__version__ = "0.1.0"

__all__ = [
    # Clients
    "TokenProtocolBase",
    "ERC20Client",
    "TokenClientConfig",
    # ABI
    "ERC20_ABI",
    "build_token_contract",
    "encode_call",
    "load_abi",
    # Types and constants
    "Address",
    "Response",
    "TransferKind",
    "TransferRequest",
    "TxCall",
    "UnsignedTransaction",
    "NATIVE_DECIMALS",
    "NATIVE_TRANSFER_GAS",
    # Exceptions
    "ERC20ProtocolError",
    "ConfigurationError",
    "NetworkError",
    "TransactionError",
    "ValidationError",
    # Utility functions
    "to_fixed_point",
    "from_fixed_point",
    "is_hex_address",
    "validate_address",
    "validate_amount",
]
