from __future__ import annotations

from enum import Enum

from catalog_price.domain.price.exceptions import InvalidPriceArgumentError


class DiscountType(Enum):
    """How a discount amount is applied to a price."""

    PERCENTUAL = "percentual"  # Amount is a percentage of the price
    NOMINAL = "nominal"  # Amount is subtracted as money in the price's currency

    @classmethod
    def from_value(cls, value: DiscountType | str) -> DiscountType:
        """Resolve $value (a member or its string value) into a DiscountType.

        Raises:
            InvalidPriceArgumentError: If $value is not a known discount type.
        """
        if isinstance(value, DiscountType):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        raise InvalidPriceArgumentError(f'Invalid discount type "{value}"')
