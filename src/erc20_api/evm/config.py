"""Configuration container for the EVM transfer client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from ..abi import ERC20_ABI
from ..constants import DEFAULT_TOKEN_DECIMALS
from ..exceptions import ConfigurationError

DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_ENV_PREFIX = "ERC20_"


def _env(environ: Mapping[str, str], name: str) -> str | None:
    value = environ.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class TokenClientConfig:
    """Everything needed to build a signing client for one token contract."""

    rpc_url: str
    private_key: str
    contract_address: str
    decimals: int = DEFAULT_TOKEN_DECIMALS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    serialize_nonces: bool = True
    abi: str = ERC20_ABI

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_ENV_PREFIX,
        environ: Mapping[str, str] | None = None,
    ) -> TokenClientConfig:
        """Build a config from ``<prefix>RPC_URL``, ``<prefix>PRIVATE_KEY``,
        ``<prefix>CONTRACT_ADDRESS`` and the optional ``<prefix>DECIMALS`` and
        ``<prefix>REQUEST_TIMEOUT`` variables.
        """

        environ = os.environ if environ is None else environ

        required = {}
        for key in ("RPC_URL", "PRIVATE_KEY", "CONTRACT_ADDRESS"):
            value = _env(environ, f"{prefix}{key}")
            if value is None:
                raise ConfigurationError(
                    f"Missing environment variable {prefix}{key}",
                    details={"variable": f"{prefix}{key}"},
                )
            required[key] = value

        decimals_raw = _env(environ, f"{prefix}DECIMALS")
        timeout_raw = _env(environ, f"{prefix}REQUEST_TIMEOUT")
        try:
            decimals = int(decimals_raw) if decimals_raw else DEFAULT_TOKEN_DECIMALS
            timeout = float(timeout_raw) if timeout_raw else DEFAULT_REQUEST_TIMEOUT
        except ValueError as exc:
            raise ConfigurationError(
                "Invalid numeric environment variable", details={"error": str(exc)}
            ) from exc

        return cls(
            rpc_url=required["RPC_URL"],
            private_key=required["PRIVATE_KEY"],
            contract_address=required["CONTRACT_ADDRESS"],
            decimals=decimals,
            request_timeout=timeout,
        )
