"""Amount conversion and input validation helpers."""

import string
from decimal import Decimal, InvalidOperation

from web3 import Web3
from web3.types import ChecksumAddress

from .constants import MAX_DECIMALS, UINT256_DIGITS, UINT256_MAX
from .exceptions import ValidationError

_HEX_DIGITS = frozenset(string.hexdigits)

Amount = Decimal | int | float | str


def _to_decimal(value: Amount, field: str = "amount") -> Decimal:
    """Coerce a user-supplied amount into a finite Decimal."""
    if isinstance(value, bool):
        raise ValidationError("Amount must be numeric", field=field, value=value)

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        # str() gives the shortest repr, so 1.5 stays 1.5 and 0.1 stays 0.1
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as exc:
            raise ValidationError("Amount must be numeric", field=field, value=value) from exc
    else:
        raise ValidationError("Amount must be numeric", field=field, value=value)

    if not result.is_finite():
        raise ValidationError("Amount must be finite", field=field, value=value)

    return result


def _check_scale(scale: int) -> None:
    if isinstance(scale, bool) or not isinstance(scale, int):
        raise ValidationError("Scale must be an integer", field="scale", value=scale)
    if scale < 0 or scale > MAX_DECIMALS:
        raise ValidationError(
            f"Scale must be between 0 and {MAX_DECIMALS}", field="scale", value=scale
        )


def to_fixed_point(amount: Amount, scale: int) -> int:
    """Convert a decimal amount to integer units, truncating toward zero.

    The conversion works on the decimal digits directly, so no binary
    floating point intermediate is involved.

    Args:
        amount: Human readable amount (e.g. ``1.5`` or ``"0.000001"``)
        scale: Number of fixed-point digits (18 for ether, 6 for USDC)

    Returns:
        ``trunc(amount * 10**scale)``

    Raises:
        ValidationError: If the amount is not a finite number, the scale is
            out of range or the result does not fit in a uint256
    """
    _check_scale(scale)
    value = _to_decimal(amount)

    sign, digits, exponent = value.as_tuple()
    if not any(digits):
        return 0

    # bound the exponent before building any power of ten
    shift = exponent + scale
    if len(digits) + shift > UINT256_DIGITS:
        raise ValidationError("Value exceeds uint256 maximum", field="amount", value=amount)

    coefficient = int("".join(str(digit) for digit in digits))

    if shift >= 0:
        units = coefficient * 10**shift
    elif -shift >= len(digits):
        units = 0
    else:
        units = coefficient // 10 ** (-shift)

    if units > UINT256_MAX:
        raise ValidationError("Value exceeds uint256 maximum", field="amount", value=amount)

    return -units if sign else units


def from_fixed_point(units: int, scale: int) -> Decimal:
    """Render integer units back to a Decimal at the given scale."""
    _check_scale(scale)
    sign, digits, exponent = Decimal(int(units)).as_tuple()
    return Decimal((sign, digits, exponent - scale))


def validate_amount(amount: Amount, field: str = "amount") -> Decimal:
    """Return the amount as a Decimal, rejecting zero and negative values."""
    value = _to_decimal(amount, field=field)
    if value <= 0:
        raise ValidationError("Value must be positive", field=field, value=amount)
    return value


def is_hex_address(value: object) -> bool:
    """Return True for a ``0x``-prefixed, 20 byte hex string.

    Mixed-case input is accepted without enforcing the EIP-55 checksum.
    """
    if not isinstance(value, str):
        return False
    if len(value) != 42 or not value.startswith(("0x", "0X")):
        return False
    return all(char in _HEX_DIGITS for char in value[2:])


def validate_address(
    value: object, field: str = "to", label: str | None = None
) -> ChecksumAddress:
    """Return the checksummed form of ``value`` or raise ValidationError.

    ``label`` names the address in the message and defaults to ``field``.
    """
    if not is_hex_address(value):
        raise ValidationError(f"Invalid {label or field} address", field=field, value=value)
    return Web3.to_checksum_address("0x" + str(value)[2:])
