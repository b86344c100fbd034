from decimal import Decimal

import pytest

from services.shared.domain import Currency, Money
from services.shared.domain.exception import ValidationException


class TestMoney:
    def test_add_and_subtract(self):
        a = Money.of("100.50", "LKR")
        b = Money.of(20, "LKR")
        assert a.add(b) == Money.of("120.50", "LKR")
        assert a.subtract(b) == Money.of("80.50", "LKR")

    def test_multiply(self):
        assert Money.of(100, "LKR").multiply(3) == Money.of(300, "LKR")

    def test_negative_amount_is_rejected(self):
        with pytest.raises(ValidationException, match="cannot be negative"):
            Money.of(-1, "LKR")

    def test_subtract_below_zero_is_rejected(self):
        with pytest.raises(ValidationException):
            Money.of(10, "LKR").subtract(Money.of(20, "LKR"))

    def test_currency_mismatch_is_rejected(self):
        with pytest.raises(ValidationException, match="different currencies"):
            Money.of(10, "LKR").add(Money.of(10, "USD"))

    def test_zero(self):
        zero = Money.zero(Currency.lkr())
        assert zero.is_zero()
        assert zero.amount == Decimal("0")

    def test_str_formats_two_decimals(self):
        assert str(Money.of(220, "LKR")) == "220.00 LKR"


class TestCurrency:
    def test_code_is_upper_cased(self):
        assert Currency("lkr").code == "LKR"

    @pytest.mark.parametrize("code", ["LK", "LKRR", "12A"])
    def test_invalid_code(self, code):
        with pytest.raises(ValidationException):
            Currency(code)
