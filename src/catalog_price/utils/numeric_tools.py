from __future__ import annotations

from decimal import Decimal
from typing import TypeAlias

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Floats are converted via string to avoid binary precision noise
    (`0.1` becomes `Decimal("0.1")`, not `Decimal("0.1000000000000000055...")`).

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.

    Raises:
        TypeError: If $value is a bool or None.
        decimal.InvalidOperation: If $value is a string that is not a number.
    """
    if isinstance(value, Decimal):
        return value

    # Raise: bool is an int subclass, but `True` is never a meaningful amount
    if value is None or isinstance(value, bool):
        raise TypeError(f"$value must be a Decimal-like scalar, but provided value is: {value!r}")

    return Decimal(str(value))

