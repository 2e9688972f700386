"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity, format_amount, normalize_phone


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation_defaults_to_store_currency(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "BDT"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_addition_and_subtraction(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")
        assert Money.of("10") - Money.of("3") == Money.of("7")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "USD") + Money(Decimal("5"), "EUR")

    def test_percent_is_exact_for_whole_amounts(self):
        assert Money.of("1000").percent(Decimal("10")) == Money.of("100.00")

    def test_percent_rounds_half_up_to_minor_unit(self):
        # 12.5% of 0.20 = 0.025
        assert Money.of("0.20").percent(Decimal("12.5")) == Money.of("0.03")
        # 33% of 10.01 = 3.3033
        assert Money.of("10.01").percent(Decimal("33")) == Money.of("3.30")

    def test_str_uses_currency_symbol(self):
        assert str(Money.of("15")) == "৳15.00"
        assert str(Money.of("9.5", "USD")) == "$9.50"

    def test_unknown_currency_falls_back_to_code(self):
        assert str(Money.of("1", "GBP")) == "GBP 1.00"

    def test_is_zero(self):
        assert Money.zero().is_zero
        assert not Money.of("0.01").is_zero


class TestFormatAmount:

    def test_negative_amount(self):
        assert format_amount(Decimal("-5"), "BDT") == "-৳5.00"


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid_quantity(self):
        assert Quantity(5).value == 5

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(2.5)


# ── Phone numbers ────────────────────────────────────────────────────────────


class TestNormalizePhone:

    def test_strips_separators(self):
        assert normalize_phone("(017) 1234-5678") == "01712345678"
        assert normalize_phone("+880 1712 345678") == "+8801712345678"
