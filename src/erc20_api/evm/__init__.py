"""EVM transfer client."""

from .client import ERC20Client
from .config import TokenClientConfig
from .connections import Web3Connections
from .transactions import TransactionDispatcher

__all__ = [
    "ERC20Client",
    "TokenClientConfig",
    "TransactionDispatcher",
    "Web3Connections",
]
