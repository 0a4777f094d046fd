"""Errors raised by `Price` when a precondition is violated."""


class PriceError(Exception):
    """Base class for all price errors."""


class InvalidPriceArgumentError(PriceError, ValueError):
    """Raised when an argument has an invalid value.

    Covers negative tax rates and discount amounts, non-positive division
    coefficients and exchange rates, and unknown discount types.
    """


class PriceLogicError(PriceError):
    """Raised when an operation cannot be performed on the given prices.

    Covers a missing (mixed) tax rate where a concrete rate is required,
    combining prices in different currencies, and combining prices whose
    default amounts are denominated with and without tax.
    """


class ConversionMismatchError(PriceError):
    """Raised when a same-currency conversion is requested with an exchange rate other than 1."""

    def __init__(self, currency, exchange_rate):
        self.currency = currency
        self.exchange_rate = exchange_rate
        super().__init__(f"Conversion request mismatch. Currency cannot be the same ({currency}) while conversion rate is {exchange_rate}")
