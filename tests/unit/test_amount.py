"""Unit tests for fixed-point token amount conversion."""
from __future__ import annotations

import pytest

from lino_transport.amount import (
    DECIMALS,
    LOWER_BOUND,
    MAX_INT64,
    UPPER_BOUND,
    Amount,
    parse_from_decimal,
    to_decimal,
)
from lino_transport.errors import (
    AmountError,
    AmountOverflowError,
    AmountUnderflowError,
    InvalidFormatError,
)


class TestParseFromDecimal:
    @pytest.mark.parametrize(
        ("token", "coin", "formatted"),
        [
            ("123", 12300000, "123"),
            ("100.00023", 10000023, "100.00023"),
            ("1230", 123000000, "1230"),
            ("12.3", 1230000, "12.3"),
            ("0.123", 12300, "0.123"),
            ("0.00123", 123, "0.00123"),
            ("100082.92819", 10008292819, "100082.92819"),
        ],
    )
    def test_converts_and_formats_back(self, token: str, coin: int, formatted: str) -> None:
        amount = parse_from_decimal(token)
        assert amount == Amount(coin)
        assert str(amount) == str(coin)
        assert to_decimal(amount) == formatted

    def test_lower_bound_is_one_unit(self) -> None:
        assert parse_from_decimal("0.00001") == Amount(1)

    def test_upper_bound_is_accepted(self) -> None:
        upper = str(MAX_INT64 // DECIMALS)
        assert parse_from_decimal(upper) == Amount((MAX_INT64 // DECIMALS) * DECIMALS)

    def test_overflow(self) -> None:
        too_big = str(MAX_INT64 // DECIMALS + 1)
        with pytest.raises(AmountOverflowError):
            parse_from_decimal(too_big)

    def test_overflow_by_fraction(self) -> None:
        with pytest.raises(AmountOverflowError):
            parse_from_decimal(f"{UPPER_BOUND}.00001")

    @pytest.mark.parametrize("token", ["0", "0.000001", "0.0000099", "-1"])
    def test_underflow(self, token: str) -> None:
        with pytest.raises(AmountUnderflowError):
            parse_from_decimal(token)

    @pytest.mark.parametrize(
        "token",
        [
            "", "abc", "1.2.3", "1e5", " 1", "1 ", "NaN", "Infinity", ".5", "5.", "+1",
            # non-ASCII numerals
            "\u0661\u0662\u0663", "1.\u0665", "\uff11\uff12",
        ],
    )
    def test_invalid_format(self, token: str) -> None:
        with pytest.raises(InvalidFormatError):
            parse_from_decimal(token)

    def test_errors_are_value_errors(self) -> None:
        with pytest.raises(ValueError):
            parse_from_decimal("lino")
        assert issubclass(AmountOverflowError, AmountError)

    def test_rounds_half_to_even(self) -> None:
        assert parse_from_decimal("0.000015") == Amount(2)
        assert parse_from_decimal("0.000025") == Amount(2)
        assert parse_from_decimal("0.000035") == Amount(4)

    def test_rounds_to_nearest(self) -> None:
        assert parse_from_decimal("0.000014") == Amount(1)
        assert parse_from_decimal("0.000016") == Amount(2)

    def test_many_fraction_digits_are_exact(self) -> None:
        assert parse_from_decimal("12345678901.23456") == Amount(1234567890123456)

    def test_long_fraction_rounds_on_exact_value(self) -> None:
        just_above_half = "0.000025" + "0" * 70 + "1"
        assert parse_from_decimal(just_above_half) == Amount(3)
        just_below_half = "0.000034" + "9" * 70
        assert parse_from_decimal(just_below_half) == Amount(3)

    def test_long_exact_half_stays_even(self) -> None:
        assert parse_from_decimal("0.000025" + "0" * 70) == Amount(2)


class TestToDecimal:
    def test_zero(self) -> None:
        assert to_decimal(Amount(0)) == "0"

    def test_no_exponent_for_round_values(self) -> None:
        assert to_decimal(Amount(10**12)) == "10000000"

    def test_strips_trailing_zeros(self) -> None:
        assert to_decimal(Amount(150000)) == "1.5"

    def test_smallest_unit(self) -> None:
        assert to_decimal(Amount(1)) == str(LOWER_BOUND)

    @pytest.mark.parametrize("coin", [1, 7, 99999, 100000, 123456789, 9223372036854700000])
    def test_round_trip(self, coin: int) -> None:
        assert parse_from_decimal(to_decimal(Amount(coin))) == Amount(coin)


class TestAmount:
    def test_frozen(self) -> None:
        a = Amount(5)
        with pytest.raises(AttributeError):
            a.amount = 6  # type: ignore[misc]

    def test_arithmetic(self) -> None:
        assert Amount(5) + Amount(3) == Amount(8)
        assert Amount(5) - Amount(8) == Amount(-3)
        assert -Amount(2) == Amount(-2)

    def test_predicates(self) -> None:
        assert Amount.zero().is_zero()
        assert Amount(1).is_positive()
        assert Amount(-1).is_negative()

    def test_ordering(self) -> None:
        assert Amount(1) < Amount(2)
        assert Amount(3) >= Amount(3)

    def test_convenience_wrappers(self) -> None:
        assert Amount.from_decimal("1.5") == Amount(150000)
        assert Amount.from_int(150000).to_decimal() == "1.5"
