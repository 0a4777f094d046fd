from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict

from catalog_price.utils.numeric_tools import DecimalLike, as_decimal

_ROUNDING_MODES = frozenset(
    {
        "ROUND_UP",
        "ROUND_DOWN",
        "ROUND_CEILING",
        "ROUND_FLOOR",
        "ROUND_HALF_UP",
        "ROUND_HALF_DOWN",
        "ROUND_HALF_EVEN",
        "ROUND_05UP",
    }
)


class Currency:
    """Represents a currency with code, precision, and rounding policy.

    A Currency knows how amounts denominated in it are rounded and how many
    sub-units (e.g. cents) make up one unit. Instances are immutable and safe to
    share between any number of prices.

    Attributes:
        code (str): Currency code (e.g., "CZK", "EUR").
        precision (int): Number of decimal places kept by `round` (0-18).
        name (str): Full currency name.
        symbol (str): Display symbol (e.g., "Kč", "€"); defaults to $code.
        sub_unit (int): Number of sub-units in one unit (e.g., 100 cents in 1 EUR).
        rounding (str): `decimal` rounding mode used by `round`.
    """

    # Class-level registry for predefined currencies
    _registry: Dict[str, "Currency"] = {}

    __slots__ = ("_code", "_precision", "_name", "_symbol", "_sub_unit", "_rounding", "_quantum")

    def __init__(
        self,
        code: str,
        precision: int,
        name: str,
        symbol: str | None = None,
        sub_unit: int | None = None,
        rounding: str = ROUND_HALF_UP,
    ):
        """Initialize a Currency instance.

        Args:
            code (str): Currency code (e.g., "CZK", "EUR").
            precision (int): Number of decimal places (0-18).
            name (str): Full currency name.
            symbol (str | None): Display symbol. Defaults to $code.
            sub_unit (int | None): Number of sub-units in one unit. Defaults to `10 ** precision`.
            rounding (str): `decimal` rounding mode. Defaults to `ROUND_HALF_UP` (half away from zero).

        Raises:
            ValueError: If parameters are invalid.
        """
        # Raise: $code must be a non-empty string
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: '{code}'")

        # Raise: $precision must be a small non-negative int (bool is rejected explicitly)
        if not isinstance(precision, int) or isinstance(precision, bool) or precision < 0 or precision > 18:
            raise ValueError(f"$precision must be an integer between 0 and 18, but provided value is: {precision}")

        # Raise: $name must be a non-empty string
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"$name must be a non-empty string, but provided value is: '{name}'")

        if sub_unit is None:
            sub_unit = 10**precision

        # Raise: $sub_unit must be a positive int
        if not isinstance(sub_unit, int) or isinstance(sub_unit, bool) or sub_unit <= 0:
            raise ValueError(f"$sub_unit must be a positive integer, but provided value is: {sub_unit}")

        # Raise: $rounding must be one of the `decimal` rounding modes
        if rounding not in _ROUNDING_MODES:
            raise ValueError(f"$rounding must be a `decimal` rounding mode, but provided value is: '{rounding}'")

        self._code = code.upper().strip()
        self._precision = precision
        self._name = name.strip()
        self._symbol = symbol.strip() if symbol and symbol.strip() else self._code
        self._sub_unit = sub_unit
        self._rounding = rounding
        self._quantum = Decimal(1).scaleb(-precision)

    @property
    def code(self) -> str:
        """Get the currency code."""
        return self._code

    @property
    def precision(self) -> int:
        """Get the currency precision."""
        return self._precision

    @property
    def name(self) -> str:
        """Get the currency name."""
        return self._name

    @property
    def symbol(self) -> str:
        """Get the display symbol."""
        return self._symbol

    @property
    def sub_unit(self) -> int:
        """Get the number of sub-units in one unit of this currency."""
        return self._sub_unit

    @property
    def rounding(self) -> str:
        """Get the `decimal` rounding mode."""
        return self._rounding

    def round(self, amount: DecimalLike) -> Decimal:
        """Round $amount to this currency's precision.

        Args:
            amount: Amount to round (Decimal-like scalar).

        Returns:
            Decimal: $amount quantized to `precision` decimal places.
        """
        return as_decimal(amount).quantize(self._quantum, rounding=self._rounding)

    def equals(self, other: object) -> bool:
        """Check whether $other is the same currency (by code)."""
        return self == other

    @classmethod
    def register(cls, currency: "Currency", overwrite: bool = False) -> None:
        """Register a currency in the global registry.

        Args:
            currency (Currency): The currency to register.
            overwrite (bool): Whether to overwrite existing currency.

        Raises:
            ValueError: If currency already exists and overwrite is False.
            TypeError: If currency is not Currency instance.
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        if currency.code in cls._registry and not overwrite:
            raise ValueError(f"Currency with code '{currency.code}' already exists in registry. Use overwrite=True to replace it.")

        cls._registry[currency.code] = currency

    @classmethod
    def from_str(cls, code: str) -> "Currency":
        """Get currency from registry by code.

        Args:
            code (str): Currency code to look up (case-insensitive).

        Returns:
            Currency: The currency instance.

        Raises:
            TypeError: If $code is not a string.
            ValueError: If currency code is not found in registry.
        """
        if not isinstance(code, str):
            raise TypeError(f"$code must be a string, but provided value is: {code}")

        code = code.upper().strip()
        if code not in cls._registry:
            raise ValueError(f"Currency with code '{code}' not found in registry. Available currencies: {list(cls._registry.keys())}")

        return cls._registry[code]

    def __eq__(self, other) -> bool:
        """Check equality with another Currency."""
        if not isinstance(other, Currency):
            return False
        return self.code == other.code

    def __hash__(self) -> int:
        """Hash based on currency code."""
        return hash(self.code)

    def __str__(self) -> str:
        """Return string representation."""
        return self.code

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"{self.__class__.__name__}('{self.code}', {self.precision}, '{self.name}', sub_unit={self.sub_unit})"
