"""Token transfer protocol base interface."""

from abc import ABC, abstractmethod
from decimal import Decimal

from .types import Response


class TokenProtocolBase(ABC):
    """Native and ERC-20 transfer interface."""

    @abstractmethod
    def send_to(self, to: str, amount: Decimal | float | int | str) -> Response:
        pass

    @abstractmethod
    def erc20_send_to(self, to: str, amount: Decimal | float | int | str) -> Response:
        pass

    @abstractmethod
    def erc20_send_from(
        self, sender: str, to: str, amount: Decimal | float | int | str
    ) -> Response:
        pass

    @abstractmethod
    def connect(self) -> None:
        pass

    @abstractmethod
    def disconnect(self) -> None:
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        pass
