from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import TYPE_CHECKING, Any, ClassVar

from catalog_price.domain.monetary.currency import Currency

if TYPE_CHECKING:
    from catalog_price.domain.price.price import Price


@dataclass(frozen=True)
class PriceView:
    """Read-only projection of a `Price` for template rendering.

    Only the names in `ALLOWED_PROPERTIES` are exposed to templates (see `to_dict`).
    `is_price_from` is a display hint marking the price as a lower bound
    ("from 199 Kč"), e.g. for products with variants.

    Attributes:
        with_tax (Decimal): Tax-inclusive amount.
        without_tax (Decimal): Tax-exclusive amount.
        tax (Decimal): Tax amount.
        tax_rate (Decimal | None): Tax rate in percent; None for mixed-rate prices.
        default (Decimal): The price's default (nominal) amount.
        currency (Currency): Currency of all amounts.
        is_price_from (bool): Whether the price is displayed as a "from" price.
    """

    ALLOWED_PROPERTIES: ClassVar[tuple[str, ...]] = (
        "currency",
        "default",
        "tax",
        "tax_rate",
        "with_tax",
        "without_tax",
    )
    short_name: ClassVar[str] = "price"

    with_tax: Decimal
    without_tax: Decimal
    tax: Decimal
    tax_rate: Decimal | None
    default: Decimal
    currency: Currency
    is_price_from: bool = False

    @classmethod
    def from_price(cls, price: Price, is_price_from: bool = False) -> PriceView:
        return cls(
            with_tax=price.with_tax,
            without_tax=price.without_tax,
            tax=price.tax,
            tax_rate=price.tax_rate.value,
            default=price.default_price,
            currency=price.currency,
            is_price_from=is_price_from,
        )

    def with_is_price_from(self, is_price_from: bool) -> PriceView:
        """Return a copy with the "from" display marker set to $is_price_from."""
        return replace(self, is_price_from=is_price_from)

    def to_dict(self) -> dict[str, Any]:
        """Template context restricted to `ALLOWED_PROPERTIES`."""
        return {name: getattr(self, name) for name in self.ALLOWED_PROPERTIES}

    def __str__(self) -> str:
        return str(self.default)

    def __float__(self) -> float:
        return float(self.default)
