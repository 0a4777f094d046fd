__version__ = "0.0.1"

from catalog_price.domain.monetary.currency import Currency
from catalog_price.domain.monetary.currency_registry import CZK, EUR, GBP, HUF, JPY, PLN, USD
from catalog_price.domain.price.discount import DiscountType
from catalog_price.domain.price.exceptions import ConversionMismatchError, InvalidPriceArgumentError, PriceError, PriceLogicError
from catalog_price.domain.price.price import Price
from catalog_price.domain.price.tax_rate import MIXED_RATE, FixedRate, MixedRate, TaxRate
from catalog_price.presentation.price_view import PriceView

__all__ = [
    "CZK",
    "ConversionMismatchError",
    "Currency",
    "DiscountType",
    "EUR",
    "FixedRate",
    "GBP",
    "HUF",
    "InvalidPriceArgumentError",
    "JPY",
    "MIXED_RATE",
    "MixedRate",
    "PLN",
    "Price",
    "PriceError",
    "PriceLogicError",
    "PriceView",
    "TaxRate",
    "USD",
]
