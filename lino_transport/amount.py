"""Fixed-point token amounts with exact decimal <-> integer conversion.

One human-readable token equals ``DECIMALS`` on-chain units. All scaling is
done with :mod:`decimal` so amounts round-trip without loss.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN, Decimal, localcontext

from .errors import AmountOverflowError, AmountUnderflowError, InvalidFormatError

DECIMALS = 100_000
MAX_INT64 = 2**63 - 1

LOWER_BOUND = Decimal(1) / Decimal(DECIMALS)
UPPER_BOUND = Decimal(MAX_INT64 // DECIMALS)

# Plenty for 19-digit int64 values scaled by 10^5.
_PRECISION = 60

# DECIMALS == 10 ** _SCALE
_SCALE = 5

_DECIMAL_RE = re.compile(r"-?[0-9]+(\.[0-9]+)?")


@dataclass(frozen=True, order=True)
class Amount:
    """Quantity in the smallest indivisible on-chain unit."""

    amount: int = 0

    @classmethod
    def zero(cls) -> Amount:
        return cls(0)

    @classmethod
    def from_int(cls, value: int) -> Amount:
        return cls(int(value))

    @classmethod
    def from_decimal(cls, value: str) -> Amount:
        return parse_from_decimal(value)

    def to_decimal(self) -> str:
        return to_decimal(self)

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def __add__(self, other: Amount) -> Amount:
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.amount + other.amount)

    def __sub__(self, other: Amount) -> Amount:
        if not isinstance(other, Amount):
            return NotImplemented
        return Amount(self.amount - other.amount)

    def __neg__(self) -> Amount:
        return Amount(-self.amount)

    def __str__(self) -> str:
        return str(self.amount)


def parse_from_decimal(value: str) -> Amount:
    """Convert a decimal token string into an on-chain integer amount.

    The scaled value is rounded half-to-even to the nearest unit.

    Examples:
        "123"       -> Amount(12300000)
        "100.00023" -> Amount(10000023)

    Raises:
        InvalidFormatError: ``value`` is not a plain decimal numeral.
        AmountOverflowError: ``value`` exceeds ``UPPER_BOUND``.
        AmountUnderflowError: ``value`` is below ``LOWER_BOUND``.
    """
    if not isinstance(value, str) or not _DECIMAL_RE.fullmatch(value):
        raise InvalidFormatError(f"Illegal token amount: {value!r}")

    with localcontext() as ctx:
        ctx.prec = _PRECISION
        parsed = Decimal(value)
        if parsed > UPPER_BOUND:
            raise AmountOverflowError(f"Token amount overflow: {value}")
        if parsed < LOWER_BOUND:
            raise AmountUnderflowError(
                f"Token amount {value} is less than lower bound {LOWER_BOUND}"
            )
        # shift the exponent directly so no digit is rounded before quantize
        sign, digits, exponent = parsed.as_tuple()
        shifted = Decimal((sign, digits, exponent + _SCALE))
        scaled = shifted.quantize(Decimal(1), rounding=ROUND_HALF_EVEN)
    return Amount(int(scaled))


def to_decimal(amount: Amount) -> str:
    """Format an on-chain amount as the minimal decimal token string."""
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        value = (Decimal(amount.amount) / DECIMALS).normalize()
    # normalize() may produce exponent form, e.g. 1.23E+3
    return format(value, "f")
