from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation, getcontext
from typing import TYPE_CHECKING

from catalog_price.domain.monetary.currency import Currency
from catalog_price.domain.price.discount import DiscountType
from catalog_price.domain.price.exceptions import ConversionMismatchError, InvalidPriceArgumentError, PriceLogicError
from catalog_price.domain.price.tax_rate import HUNDRED, MIXED_RATE, FixedRate, MixedRate, TaxRate, as_tax_rate
from catalog_price.utils.numeric_tools import DecimalLike, as_decimal

if TYPE_CHECKING:
    from catalog_price.presentation.price_view import PriceView

# Set high precision for financial calculations
getcontext().prec = 28

logger = logging.getLogger(__name__)


class Price:
    """Immutable price of a product in one currency, split into net amount and tax.

    A Price is built from a nominal ("default") amount that either includes tax or
    not. The other two amounts are derived from it using the tax rate and rounded by
    the currency, so that `with_tax == without_tax + tax` always holds.

    Every operation returns a new instance. The `Currency` is shared, never copied.

    Attributes:
        without_tax (Decimal): Tax-exclusive amount.
        tax (Decimal): Tax amount.
        with_tax (Decimal): Tax-inclusive amount.
        tax_rate (TaxRate): `FixedRate`, or `MIXED_RATE` for sums of prices with different rates.
        currency (Currency): Currency of all amounts.
        default_price (Decimal): The amount this price was built to represent.
        default_price_includes_tax (bool): Whether $default_price is `with_tax` (True) or `without_tax` (False).
    """

    # Decimal places of the coefficient extracting tax from a tax-inclusive amount
    TAX_COEF_PRECISION = 4

    # Value limits of amounts and coefficients
    MAX_VALUE = Decimal("999_999_999_999_999.999999999999999999")
    MIN_VALUE = Decimal("-999_999_999_999_999.999999999999999999")

    __slots__ = (
        "_without_tax",
        "_tax",
        "_with_tax",
        "_tax_rate",
        "_currency",
        "_default_price",
        "_default_price_includes_tax",
    )

    def __init__(self, amount: DecimalLike, includes_tax: bool, tax_rate: DecimalLike | FixedRate, currency: Currency):
        """Initialize a Price and derive its tax split.

        Args:
            amount: Nominal amount (Decimal-like scalar).
            includes_tax: Whether $amount already includes tax.
            tax_rate: Tax rate in percent, e.g. 21 for 21 %.
            currency: Currency of $amount.

        Raises:
            TypeError: If $currency is not a Currency instance.
            InvalidPriceArgumentError: If $amount is not a finite number within `MIN_VALUE`..`MAX_VALUE`, or $tax_rate is negative.
            PriceLogicError: If $tax_rate is None or mixed.
        """
        # Raise: currency must be an instance of Currency
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        rate = self._require_fixed_rate(tax_rate)
        self._currency = currency
        self._tax_rate: TaxRate = rate
        self._default_price_includes_tax = bool(includes_tax)
        self._default_price = self._round(self._to_decimal(amount, "__init__", "amount"))

        if self._default_price_includes_tax:
            self._with_tax = self._default_price
            self._tax = self._round(self._with_tax * rate.coefficient(self.TAX_COEF_PRECISION))
            self._without_tax = self._with_tax - self._tax
        else:
            self._without_tax = self._default_price
            self._tax = self._round(self._without_tax * rate.rate / HUNDRED)
            self._with_tax = self._without_tax + self._tax

    # region Properties

    @property
    def without_tax(self) -> Decimal:
        return self._without_tax

    @property
    def tax(self) -> Decimal:
        return self._tax

    @property
    def with_tax(self) -> Decimal:
        return self._with_tax

    @property
    def tax_rate(self) -> TaxRate:
        """Tax rate of this price; `MIXED_RATE` if it is a sum of differently taxed prices."""
        return self._tax_rate

    @property
    def currency(self) -> Currency:
        return self._currency

    @property
    def default_price(self) -> Decimal:
        return self._default_price

    @property
    def default_price_includes_tax(self) -> bool:
        return self._default_price_includes_tax

    def with_or_without_tax(self, with_tax: bool) -> Decimal:
        """Return `with_tax` if $with_tax is True, else `without_tax`."""
        return self._with_tax if with_tax else self._without_tax

    # endregion

    # region Named constructors

    @classmethod
    def zero(cls, currency: Currency, includes_tax: bool = False) -> Price:
        """Create a zero price with a zero tax rate."""
        return cls(0, includes_tax, 0, currency)

    @classmethod
    def sum_price(cls, with_tax: DecimalLike, tax: DecimalLike, currency: Currency, includes_tax: bool = False) -> Price:
        """Create a price from a known gross amount and tax, without deriving them from a rate.

        Used for totals aggregated from prices with different tax rates, therefore the
        resulting tax rate is always `MIXED_RATE`.

        Args:
            with_tax: Tax-inclusive amount.
            tax: Tax amount contained in $with_tax.
            currency: Currency of both amounts.
            includes_tax: Whether the default price is the tax-inclusive amount.

        Returns:
            Price: New price with `without_tax = with_tax - tax`.
        """
        # Raise: currency must be an instance of Currency
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        gross = cls._round_in(currency, cls._to_decimal(with_tax, "sum_price", "with_tax"))
        tax_amount = cls._round_in(currency, cls._to_decimal(tax, "sum_price", "tax"))
        net = gross - tax_amount
        return cls._from_components(
            without_tax=net,
            tax=tax_amount,
            with_tax=gross,
            tax_rate=MIXED_RATE,
            currency=currency,
            default_price=gross if includes_tax else net,
            default_price_includes_tax=bool(includes_tax),
        )

    # endregion

    # region Transformations

    def clone(self) -> Price:
        """Return a copy of this price sharing the same Currency."""
        return self._replace()

    def with_default_price_includes_tax(self, includes_tax: bool) -> Price:
        """Return a copy whose default price is `with_tax` ($includes_tax True) or `without_tax`.

        Amounts and tax are kept as they are; only the nominal amount is re-picked.
        """
        includes_tax = bool(includes_tax)
        return self._replace(
            default_price=self._with_tax if includes_tax else self._without_tax,
            default_price_includes_tax=includes_tax,
        )

    def multiply(self, coef: DecimalLike) -> Price:
        """Scale all amounts by $coef, rounding each one by the currency.

        Tax is not recomputed from the rate; the existing split is scaled directly.
        """
        coef = self._to_decimal(coef, "multiply", "coef")
        if coef == 1:
            return self.clone()

        return self._replace(
            without_tax=self._round(self._without_tax * coef),
            tax=self._round(self._tax * coef),
            with_tax=self._round(self._with_tax * coef),
            default_price=self._round(self._default_price * coef),
        )

    def divide(self, coef: DecimalLike) -> Price:
        """Divide all amounts by $coef.

        Raises:
            InvalidPriceArgumentError: If $coef <= 0.
        """
        coef = self._to_decimal(coef, "divide", "coef")

        # Raise: division coefficient must be positive
        if coef <= 0:
            raise InvalidPriceArgumentError(f"Division coefficient must be greater than zero, {coef} given")

        return self.multiply(Decimal(1) / coef)

    def to_sub_units(self) -> Price:
        """Express all amounts in currency sub-units (e.g. cents).

        Amounts are multiplied by `currency.sub_unit` without the rounding `multiply` applies.
        """
        sub_unit = self._currency.sub_unit
        return self._replace(
            without_tax=self._without_tax * sub_unit,
            tax=self._tax * sub_unit,
            with_tax=self._with_tax * sub_unit,
            default_price=self._default_price * sub_unit,
        )

    def add(self, other: Price) -> Price:
        """Add $other to this price component-wise.

        Raises:
            PriceLogicError: If currencies differ, or both prices are non-zero and their
                default prices are denominated differently (with vs. without tax).
        """
        self._assert_combinable(other, "add")
        tax_rate, includes_tax = self._merge_tax_rate(other)

        return self._replace(
            without_tax=self._without_tax + other._without_tax,
            tax=self._tax + other._tax,
            with_tax=self._with_tax + other._with_tax,
            default_price=self._default_price + other._default_price,
            tax_rate=tax_rate,
            default_price_includes_tax=includes_tax,
        )

    def subtract(self, other: Price) -> Price:
        """Subtract $other from this price component-wise.

        Raises:
            PriceLogicError: Under the same conditions as `add`.
        """
        self._assert_combinable(other, "subtract")
        tax_rate, includes_tax = self._merge_tax_rate(other)

        return self._replace(
            without_tax=self._round(self._without_tax - other._without_tax),
            tax=self._round(self._tax - other._tax),
            with_tax=self._round(self._with_tax - other._with_tax),
            default_price=self._round(self._default_price - other._default_price),
            tax_rate=tax_rate,
            default_price_includes_tax=includes_tax,
        )

    def discount(self, amount: DecimalLike, discount_type: DiscountType | str) -> Price:
        """Apply a percentual or nominal discount.

        A nominal discount is a price of $amount at this price's tax rate (denominated
        the same way) subtracted from this price. For mixed-rate prices the effective
        rate `tax / with_tax * 100` is used.

        Args:
            amount: Percentage or money amount of the discount.
            discount_type: `DiscountType` or its string value ("percentual", "nominal").

        Raises:
            InvalidPriceArgumentError: If $discount_type is unknown or $amount is negative.
        """
        discount_type = DiscountType.from_value(discount_type)
        amount = self._to_decimal(amount, "discount", "amount")

        # Raise: discount amount cannot be negative
        if amount < 0:
            raise InvalidPriceArgumentError(f'Invalid discount amount "{amount}"')

        if discount_type is DiscountType.PERCENTUAL:
            return self.multiply(1 - amount / HUNDRED)

        tax_rate = self._effective_tax_rate()
        return self.subtract(Price(amount, self._default_price_includes_tax, tax_rate, self._currency))

    def zeroize(self) -> Price:
        """Return a zero price in the same currency, keeping the rate (0 if mixed)."""
        tax_rate = self._tax_rate if isinstance(self._tax_rate, FixedRate) else FixedRate(0)
        return Price(0, self._default_price_includes_tax, tax_rate, self._currency)

    def modify(self, amount: DecimalLike, tax_rate: DecimalLike | FixedRate | None = None) -> Price:
        """Rebuild the price from a new nominal $amount.

        Args:
            amount: New default price.
            tax_rate: Tax rate to use; defaults to the current rate.

        Raises:
            PriceLogicError: If no $tax_rate is given and the current rate is mixed.
            InvalidPriceArgumentError: If $tax_rate is negative.
        """
        tax_rate = self._tax_rate if tax_rate is None else tax_rate
        return Price(amount, self._default_price_includes_tax, self._require_fixed_rate(tax_rate), self._currency)

    def convert_to(self, currency: Currency, exchange_rate: DecimalLike) -> Price:
        """Convert this price into $currency.

        The default price is divided by $exchange_rate and the tax split is derived
        again in the target currency (it is not scaled).

        Args:
            currency: Target currency.
            exchange_rate: Units of this price's currency per one unit of $currency.

        Raises:
            ConversionMismatchError: If $currency is this price's currency and $exchange_rate != 1.
            InvalidPriceArgumentError: If $exchange_rate <= 0.
            PriceLogicError: If the tax rate is mixed.
        """
        # Raise: currency must be an instance of Currency
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        exchange_rate = self._to_decimal(exchange_rate, "convert_to", "exchange_rate")

        # Raise: same-currency conversion is only valid with a unity rate
        if currency.equals(self._currency) and exchange_rate != 1:
            raise ConversionMismatchError(currency, exchange_rate)

        if currency.equals(self._currency):
            return self.clone()

        # Raise: exchange rate must be positive
        if exchange_rate <= 0:
            raise InvalidPriceArgumentError(f"Cannot call `convert_to` because $exchange_rate ({exchange_rate}) <= 0")

        tax_rate = self._require_fixed_rate(self._tax_rate)
        logger.debug(f"Converting price {self._default_price} {self._currency} to {currency} at $exchange_rate {exchange_rate}")
        return Price(self._default_price / exchange_rate, self._default_price_includes_tax, tax_rate, currency)

    # endregion

    # region Comparison

    def equals(self, other: Price) -> bool:
        """Value equality on `without_tax`, `tax_rate`, `with_tax` and currency."""
        if not isinstance(other, Price):
            return False
        return (
            self._without_tax == other._without_tax
            and self._tax_rate == other._tax_rate
            and self._with_tax == other._with_tax
            and self._currency.equals(other._currency)
        )

    def is_higher_than(self, other: Price) -> bool:
        """Check whether the default price is higher than the default price of $other.

        Raises:
            PriceLogicError: If currencies differ.
        """
        self._assert_same_currency(other, "is_higher_than")
        return self._default_price > other._default_price

    def is_zero(self) -> bool:
        return self._default_price == 0 and self._without_tax == 0 and self._with_tax == 0 and self._tax == 0

    # endregion

    # region Presentation

    def to_view(self, is_price_from: bool = False) -> PriceView:
        """Project this price into a read-only `PriceView` for templates."""
        from catalog_price.presentation.price_view import PriceView

        return PriceView.from_price(self, is_price_from=is_price_from)

    # endregion

    # region Operators

    def __eq__(self, other) -> bool:
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self._without_tax, self._tax_rate, self._with_tax, self._currency.code))

    def __gt__(self, other) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        return self.is_higher_than(other)

    def __lt__(self, other) -> bool:
        if not isinstance(other, Price):
            return NotImplemented
        return other.is_higher_than(self)

    def __add__(self, other):
        if not isinstance(other, Price):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Price):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        if not self._is_scalar(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if not self._is_scalar(other):
            return NotImplemented
        return self.divide(other)

    def __str__(self) -> str:
        return str(self._default_price)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(with_tax={self._with_tax}, without_tax={self._without_tax}, tax={self._tax}, "
            f"tax_rate={self._tax_rate}, currency={self._currency.code}, default_price_includes_tax={self._default_price_includes_tax})"
        )

    # endregion

    # region Internals

    @classmethod
    def _from_components(
        cls,
        without_tax: Decimal,
        tax: Decimal,
        with_tax: Decimal,
        tax_rate: TaxRate,
        currency: Currency,
        default_price: Decimal,
        default_price_includes_tax: bool,
    ) -> Price:
        """Build a Price from already derived amounts, skipping the tax derivation."""
        price = cls.__new__(cls)
        price._without_tax = without_tax
        price._tax = tax
        price._with_tax = with_tax
        price._tax_rate = tax_rate
        price._currency = currency
        price._default_price = default_price
        price._default_price_includes_tax = default_price_includes_tax
        return price

    def _replace(self, **changes) -> Price:
        fields = {
            "without_tax": self._without_tax,
            "tax": self._tax,
            "with_tax": self._with_tax,
            "tax_rate": self._tax_rate,
            "currency": self._currency,
            "default_price": self._default_price,
            "default_price_includes_tax": self._default_price_includes_tax,
        }
        fields.update(changes)
        return self._from_components(**fields)

    def _round(self, amount: Decimal) -> Decimal:
        return self._round_in(self._currency, amount)

    @staticmethod
    def _round_in(currency: Currency, amount: Decimal) -> Decimal:
        # Raise: rounded amount must fit into the decimal context precision
        try:
            rounded = currency.round(amount)
        except InvalidOperation as e:
            raise InvalidPriceArgumentError(f"Amount {amount} cannot be rounded to {currency.precision} decimal places of {currency}") from e

        # -0.00 -> 0.00
        return rounded.copy_abs() if rounded == 0 else rounded

    @classmethod
    def _to_decimal(cls, value: DecimalLike, method: str, param: str) -> Decimal:
        # Raise: $value must be convertible to Decimal
        try:
            decimal_value = as_decimal(value)
        except (ValueError, TypeError, InvalidOperation) as e:
            raise InvalidPriceArgumentError(f"Cannot call `{method}` because ${param} ({value!r}) cannot be converted to Decimal") from e

        # Raise: NaN and Infinity are not amounts
        if not decimal_value.is_finite():
            raise InvalidPriceArgumentError(f"Cannot call `{method}` because ${param} ({decimal_value}) is not a finite number")

        # Raise: value must be within allowed range
        if decimal_value > cls.MAX_VALUE:
            raise InvalidPriceArgumentError(f"Cannot call `{method}` because ${param} ({decimal_value}) exceeds maximum allowed value {cls.MAX_VALUE}")
        if decimal_value < cls.MIN_VALUE:
            raise InvalidPriceArgumentError(f"Cannot call `{method}` because ${param} ({decimal_value}) is below minimum allowed value {cls.MIN_VALUE}")

        return decimal_value

    @staticmethod
    def _is_scalar(value: object) -> bool:
        """Check whether $value is a number operators accept (bool and str excluded)."""
        return isinstance(value, (Decimal, int, float)) and not isinstance(value, bool)

    @staticmethod
    def _require_fixed_rate(tax_rate: DecimalLike | TaxRate | None) -> FixedRate:
        # Raise: a concrete tax rate is required
        if tax_rate is None or isinstance(tax_rate, MixedRate):
            raise PriceLogicError("Tax rate cannot be null")
        return as_tax_rate(tax_rate)

    def _effective_tax_rate(self) -> FixedRate:
        """Current rate, or the rate implied by `tax / with_tax` for mixed-rate prices."""
        if isinstance(self._tax_rate, FixedRate):
            return self._tax_rate
        if self._with_tax == 0:
            return FixedRate(0)
        return FixedRate(self._tax / self._with_tax * HUNDRED)

    def _merge_tax_rate(self, other: Price) -> tuple[TaxRate, bool]:
        """Tax rate and default-price flag of the combination of this price with $other."""
        if self.is_zero():
            return other._tax_rate, other._default_price_includes_tax
        if not other.is_zero() and self._tax_rate != other._tax_rate:
            logger.debug(f"Combining prices with different tax rates ({self._tax_rate} and {other._tax_rate}); resulting tax rate is mixed")
            return MIXED_RATE, self._default_price_includes_tax
        return self._tax_rate, self._default_price_includes_tax

    def _assert_same_currency(self, other: Price, method: str) -> None:
        # Raise: $other must be a Price
        if not isinstance(other, Price):
            raise TypeError(f"Cannot call `{method}` because $other is not Price (got type '{type(other).__name__}')")

        # Raise: prices in different currencies cannot be combined
        if not self._currency.equals(other._currency):
            raise PriceLogicError(f"Cannot combine prices with different currencies: {self._currency} and {other._currency}")

    def _assert_combinable(self, other: Price, method: str) -> None:
        self._assert_same_currency(other, method)

        # Raise: non-zero prices must be denominated the same way (with or without tax)
        if not self.is_zero() and not other.is_zero() and self._default_price_includes_tax != other._default_price_includes_tax:
            raise PriceLogicError("Cannot combine default price with and without tax")

    # endregion
