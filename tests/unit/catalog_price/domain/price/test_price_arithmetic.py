from __future__ import annotations

import logging
from decimal import Decimal

import pytest

from catalog_price.domain.monetary.currency_registry import CZK, EUR, JPY
from catalog_price.domain.price.exceptions import InvalidPriceArgumentError, PriceLogicError
from catalog_price.domain.price.price import Price
from catalog_price.domain.price.tax_rate import MIXED_RATE, FixedRate

# Constants
NET_100 = Price(100, False, 21, CZK)
GROSS_100 = Price(100, True, 21, CZK)


# region multiply / divide


def test_multiply_by_one_is_identity() -> None:
    result = NET_100.multiply(1)
    assert result.equals(NET_100)
    assert result is not NET_100
    assert result.currency is CZK


def test_multiply_scales_all_amounts() -> None:
    result = NET_100.multiply(3)
    assert result.without_tax == Decimal("300.00")
    assert result.tax == Decimal("63.00")
    assert result.with_tax == Decimal("363.00")
    assert result.default_price == Decimal("300.00")
    assert result.tax_rate == FixedRate(21)


def test_multiply_rounds_each_amount() -> None:
    price = Price(10, True, 21, CZK)  # with 10.00, tax 1.74, without 8.26
    result = price.multiply("0.333")
    assert result.without_tax == Decimal("2.75")
    assert result.tax == Decimal("0.58")
    assert result.with_tax == Decimal("3.33")
    assert result.default_price == Decimal("3.33")


def test_multiply_operator() -> None:
    assert (NET_100 * 2).equals(NET_100.multiply(2))
    assert (2 * NET_100).equals(NET_100.multiply(2))
    with pytest.raises(TypeError):
        NET_100 * NET_100


def test_divide() -> None:
    result = NET_100.divide(4)
    assert result.without_tax == Decimal("25.00")
    assert result.tax == Decimal("5.25")
    assert result.with_tax == Decimal("30.25")
    assert (NET_100 / 4).equals(result)


@pytest.mark.parametrize("coef", [0, -1, "-0.5"])
def test_divide_by_non_positive_coefficient(coef) -> None:
    with pytest.raises(InvalidPriceArgumentError):
        NET_100.divide(coef)


def test_multiply_with_invalid_coefficient() -> None:
    with pytest.raises(InvalidPriceArgumentError):
        NET_100.multiply("twice")


# endregion

# region to_sub_units


def test_to_sub_units() -> None:
    result = GROSS_100.to_sub_units()
    assert result.with_tax == Decimal("10000")
    assert result.tax == Decimal("1736")
    assert result.without_tax == Decimal("8264")
    assert result.default_price == Decimal("10000")
    assert result.currency is CZK


def test_to_sub_units_without_minor_unit() -> None:
    price = Price(1000, True, 10, JPY)
    assert price.to_sub_units().equals(price)


# endregion

# region add / subtract


def test_add_same_rate() -> None:
    result = NET_100.add(Price(50, False, 21, CZK))
    assert result.without_tax == Decimal("150.00")
    assert result.tax == Decimal("31.50")
    assert result.with_tax == Decimal("181.50")
    assert result.default_price == Decimal("150.00")
    assert result.tax_rate == FixedRate(21)


def test_add_different_rates_gives_mixed_rate() -> None:
    result = NET_100.add(Price(100, False, 10, CZK))
    assert result.tax_rate is MIXED_RATE
    assert result.tax_rate.value is None
    assert result.without_tax == Decimal("200.00")
    assert result.tax == Decimal("31.00")
    assert result.with_tax == Decimal("231.00")


def test_add_mixed_to_mixed_stays_mixed() -> None:
    result = Price.sum_price(121, 21, CZK).add(Price.sum_price("110", "10", CZK))
    assert result.tax_rate is MIXED_RATE
    assert result.with_tax == Decimal("231")


def test_add_and_subtract_zero_is_identity() -> None:
    zero = Price.zero(CZK)
    assert NET_100.add(zero).equals(NET_100)
    assert NET_100.subtract(zero).equals(NET_100)
    # Zero is exempt from the with/without tax denomination check
    assert GROSS_100.add(zero).equals(GROSS_100)
    assert GROSS_100.subtract(zero).equals(GROSS_100)


def test_zero_receiver_adopts_rate_and_denomination() -> None:
    result = Price.zero(CZK).add(GROSS_100)
    assert result.tax_rate == FixedRate(21)
    assert result.default_price_includes_tax is True
    assert result.equals(GROSS_100)


def test_add_different_currencies_fails() -> None:
    with pytest.raises(PriceLogicError):
        NET_100.add(Price(100, False, 21, EUR))
    with pytest.raises(PriceLogicError):
        NET_100.subtract(Price(100, False, 21, EUR))


def test_add_different_denomination_fails() -> None:
    with pytest.raises(PriceLogicError):
        NET_100.add(GROSS_100)
    with pytest.raises(PriceLogicError):
        GROSS_100.subtract(NET_100)


def test_add_non_price_fails() -> None:
    with pytest.raises(TypeError):
        NET_100.add(100)
    with pytest.raises(TypeError):
        NET_100 + 100


def test_subtract() -> None:
    result = NET_100.subtract(Price(30, False, 21, CZK))
    assert result.without_tax == Decimal("70.00")
    assert result.tax == Decimal("14.70")
    assert result.with_tax == Decimal("84.70")
    assert result.tax_rate == FixedRate(21)
    assert (NET_100 - Price(30, False, 21, CZK)).equals(result)


def test_subtract_to_zero() -> None:
    result = NET_100.subtract(NET_100)
    assert result.is_zero()
    assert not result.with_tax.is_signed()


def test_operations_do_not_mutate_operands() -> None:
    before = repr(NET_100)
    NET_100.add(Price(50, False, 10, CZK))
    NET_100.subtract(Price(50, False, 10, CZK))
    NET_100.multiply(5)
    assert repr(NET_100) == before


# endregion


def test_mixed_rate_sum_is_logged(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="catalog_price.domain.price.price"):
        NET_100.add(Price(100, False, 10, CZK))
    assert "resulting tax rate is mixed" in caplog.text


def test_zero_receiver_adopts_mixed_rate() -> None:
    mixed = Price.sum_price(121, 21, CZK, includes_tax=True)
    result = Price.zero(CZK).add(mixed)
    assert result.tax_rate is MIXED_RATE
    assert result.default_price_includes_tax is True
    assert result.with_tax == Decimal("121")
    assert result.without_tax == Decimal("100")


def test_operators_accept_numbers_only() -> None:
    assert (NET_100 * Decimal("0.5")).equals(NET_100.multiply("0.5"))
    assert (NET_100 * 0.5).equals(NET_100.multiply("0.5"))
    with pytest.raises(TypeError):
        NET_100 * "2"
    with pytest.raises(TypeError):
        "2" * NET_100
    with pytest.raises(TypeError):
        NET_100 / "2"
    with pytest.raises(TypeError):
        NET_100 * True


@pytest.mark.parametrize("coef", ["NaN", "Infinity", "1e30"])
def test_non_finite_or_out_of_range_coefficient(coef) -> None:
    with pytest.raises(InvalidPriceArgumentError):
        NET_100.divide(coef)
    with pytest.raises(InvalidPriceArgumentError):
        NET_100.multiply(coef)
