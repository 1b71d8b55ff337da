"""Exception hierarchy for the ERC-20 transfer API."""

from typing import Any


class ERC20ProtocolError(Exception):
    """Base exception for all transfer errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ERC20ProtocolError):
    """Raised when the client configuration cannot be used."""

    pass


class NetworkError(ERC20ProtocolError):
    """Raised when network/connection issues occur."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class ValidationError(ERC20ProtocolError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class TransactionError(ERC20ProtocolError):
    """Raised when a step of the build/sign/submit pipeline fails."""

    def __init__(
        self,
        message: str,
        step: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.step = step
