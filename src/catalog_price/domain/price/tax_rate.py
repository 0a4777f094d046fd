from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import TypeAlias

from catalog_price.domain.price.exceptions import InvalidPriceArgumentError
from catalog_price.utils.numeric_tools import DecimalLike, as_decimal

HUNDRED = Decimal(100)


class FixedRate:
    """A concrete tax rate in percent (e.g. 21 for 21 %).

    Attributes:
        rate (Decimal): The percentage, never negative.
    """

    __slots__ = ("_rate",)

    def __init__(self, rate: DecimalLike):
        """Initialize a FixedRate.

        Args:
            rate: Percentage as a Decimal-like scalar.

        Raises:
            InvalidPriceArgumentError: If $rate is not a finite number or is negative.
        """
        # Raise: $rate must be convertible to Decimal
        try:
            decimal_rate = as_decimal(rate)
        except (ValueError, TypeError, InvalidOperation) as e:
            raise InvalidPriceArgumentError(f"Cannot init `FixedRate` because $rate ({rate!r}) cannot be converted to Decimal") from e

        # Raise: NaN and Infinity are not rates
        if not decimal_rate.is_finite():
            raise InvalidPriceArgumentError(f"Cannot init `FixedRate` because $rate ({decimal_rate}) is not a finite number")

        # Raise: tax rate cannot be negative
        if decimal_rate < 0:
            raise InvalidPriceArgumentError(f"Tax rate must be greater than or equal to zero, {decimal_rate} given")

        self._rate = decimal_rate

    @property
    def rate(self) -> Decimal:
        return self._rate

    @property
    def value(self) -> Decimal:
        """The rate as a plain Decimal."""
        return self._rate

    @property
    def is_mixed(self) -> bool:
        return False

    def coefficient(self, precision: int) -> Decimal:
        """Coefficient that extracts the tax from a tax-inclusive amount.

        Computed as `rate / (100 + rate)` rounded half away from zero to $precision
        decimal places, so that repeating decimals (21 / 121 = 0.17355...) do not
        leak into the tax amount.

        Args:
            precision: Number of decimal places of the coefficient.

        Returns:
            Decimal: The rounded coefficient.
        """
        return (self._rate / (HUNDRED + self._rate)).quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)

    def __eq__(self, other) -> bool:
        if not isinstance(other, FixedRate):
            return False
        return self._rate == other._rate

    def __hash__(self) -> int:
        return hash(self._rate)

    def __str__(self) -> str:
        return f"{self._rate} %"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._rate})"


class MixedRate:
    """Tax rate of a price summed from prices taxed at different rates.

    Its totals are well defined but no single percentage describes them. Use the
    shared `MIXED_RATE` instance.
    """

    __slots__ = ()

    @property
    def value(self) -> None:
        return None

    @property
    def is_mixed(self) -> bool:
        return True

    def __eq__(self, other) -> bool:
        return isinstance(other, MixedRate)

    def __hash__(self) -> int:
        return hash(MixedRate)

    def __str__(self) -> str:
        return "mixed"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


MIXED_RATE = MixedRate()

TaxRate: TypeAlias = FixedRate | MixedRate


def as_tax_rate(value: DecimalLike | TaxRate | None) -> TaxRate:
    """Normalize $value into a `TaxRate` variant.

    `None` stands for a mixed rate; numbers become `FixedRate`.

    Raises:
        InvalidPriceArgumentError: If $value is a negative or non-numeric rate.
    """
    if isinstance(value, (FixedRate, MixedRate)):
        return value
    if value is None:
        return MIXED_RATE
    return FixedRate(value)
