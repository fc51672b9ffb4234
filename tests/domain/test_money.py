"""Unit tests for the Money value object."""

from decimal import Decimal

import pytest

from vending.domain.exceptions import (
    AmountOverflowError,
    AmountUnderflowError,
    DivisionByZeroError,
    InvalidAmountError,
)
from vending.domain.model.value_objects import MAX_CENTS, MIN_CENTS, Money


class TestMoneyConstruction:

    def test_from_dollars_cents(self):
        money = Money.from_dollars_cents(5, 25)
        assert money.cents == 525
        assert money.dollars == 5
        assert money.cents_portion == 25

    def test_negative_dollars_mirror_cents(self):
        money = Money.from_dollars_cents(-2, 50)
        assert money.cents == -250
        assert str(money) == "-$2.50"

    @pytest.mark.parametrize("cents", [-1, 100, 150])
    def test_cents_part_out_of_range_rejected(self, cents):
        with pytest.raises(InvalidAmountError, match="between 0 and 99"):
            Money.from_dollars_cents(1, cents)

    def test_from_dollars_cents_overflow(self):
        with pytest.raises(AmountOverflowError):
            Money.from_dollars_cents(MAX_CENTS // 100 + 1, 0)

    def test_from_decimal_rounds_half_up(self):
        assert Money.from_decimal(5.25) == Money(525)
        assert Money.from_decimal(0.125) == Money(13)

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_from_decimal_rejects_non_finite(self, value):
        with pytest.raises(InvalidAmountError):
            Money.from_decimal(value)

    def test_from_decimal_too_large(self):
        with pytest.raises(AmountOverflowError):
            Money.from_decimal(1e300)
        with pytest.raises(AmountUnderflowError):
            Money.from_decimal(-1e300)

    def test_of_parses_exact_amounts(self):
        assert Money.of("2.50") == Money(250)
        assert Money.of("3") == Money(300)
        assert Money.of(4) == Money(400)
        assert Money.of(Decimal("0.05")) == Money(5)
        assert Money.of(" 1.10 ") == Money(110)

    def test_of_rejects_sub_cent_precision(self):
        with pytest.raises(InvalidAmountError, match="two decimal places"):
            Money.of("1.005")

    @pytest.mark.parametrize("raw", ["abc", "", "NaN", "Infinity"])
    def test_of_rejects_garbage(self, raw):
        with pytest.raises(InvalidAmountError):
            Money.of(raw)

    def test_of_rejects_float(self):
        with pytest.raises(InvalidAmountError, match="from_decimal"):
            Money.of(1.5)

    def test_non_int_cents_rejected(self):
        with pytest.raises(InvalidAmountError):
            Money("100")
        with pytest.raises(InvalidAmountError):
            Money(True)

    def test_out_of_range_cents_rejected(self):
        with pytest.raises(AmountOverflowError):
            Money(MAX_CENTS + 1)
        with pytest.raises(AmountUnderflowError):
            Money(MIN_CENTS - 1)

    def test_zero(self):
        assert Money.zero().is_zero
        assert not Money.zero().is_positive
        assert not Money.zero().is_negative


class TestMoneyArithmetic:

    def test_add_and_sub_round_trip(self):
        a, b = Money(1234), Money(-567)
        assert (a + b) - b == a

    def test_add_overflow(self):
        with pytest.raises(AmountOverflowError):
            Money(MAX_CENTS) + Money(1)

    def test_sub_underflow(self):
        with pytest.raises(AmountUnderflowError):
            Money(MIN_CENTS) - Money(1)

    def test_sub_may_go_negative(self):
        assert Money(100) - Money(250) == Money(-150)

    def test_multiply_by_int(self):
        assert Money(150) * 3 == Money(450)

    def test_multiply_overflow(self):
        with pytest.raises(AmountOverflowError):
            Money(MAX_CENTS) * 2
        with pytest.raises(AmountOverflowError):
            Money(MAX_CENTS) * -2

    def test_multiply_by_float_is_type_error(self):
        with pytest.raises(TypeError):
            Money(100) * 1.5

    def test_divide_truncates_toward_zero(self):
        assert Money(1000) / 3 == Money(333)
        assert Money(-1000) / 3 == Money(-333)
        assert Money(7) / -2 == Money(-3)

    def test_divide_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            Money(100) / 0

    def test_negate_min_overflows(self):
        with pytest.raises(AmountOverflowError):
            -Money(MIN_CENTS)

    def test_abs(self):
        assert abs(Money(-250)) == Money(250)

    def test_ordering(self):
        assert Money(100) < Money(150)
        assert max(Money(5), Money(3)) == Money(5)


class TestMoneyDisplay:

    def test_str(self):
        assert str(Money(525)) == "$5.25"
        assert str(Money(5)) == "$0.05"
        assert str(Money(-250)) == "-$2.50"

    def test_decimal_string(self):
        assert Money(150).to_decimal_string() == "1.50"
        assert Money(-5).to_decimal_string() == "-0.05"

    def test_dollars_truncate_toward_zero(self):
        assert Money(-250).dollars == -2
        assert Money(-250).cents_portion == 50

    def test_as_decimal(self):
        assert Money(150).as_decimal() == Decimal("1.50")
