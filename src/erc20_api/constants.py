"""Protocol constants for EVM value transfers."""

# Fixed-point digits of the chain's native currency (wei per ether)
NATIVE_DECIMALS = 18

# Intrinsic gas of a plain value transfer with empty calldata
NATIVE_TRANSFER_GAS = 21000

# ERC-20 decimals() is a uint8
MAX_DECIMALS = 255

DEFAULT_TOKEN_DECIMALS = 18

TRANSFER_FUNCTION = "transfer"
TRANSFER_FROM_FUNCTION = "transferFrom"

UINT256_MAX = 2**256 - 1
# decimal digits of UINT256_MAX
UINT256_DIGITS = 78
