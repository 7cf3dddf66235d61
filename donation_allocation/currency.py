"""Currency formatting driven by platform configuration."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any


@dataclass(frozen=True)
class CurrencyFormat:
    """How monetary values are rendered.

    Parameters
    ----------
    code : str
        ISO currency code, e.g. ``"USD"``.
    symbol : str
        Symbol placed next to the number.
    position : str
        ``"before"`` or ``"after"`` the number.
    decimal_places : int
        Fixed number of fraction digits.
    thousands_separator : str
        Separator between groups of three integer digits.
    decimal_separator : str
        Separator between integer and fraction digits.
    """

    code: str = "USD"
    symbol: str = "$"
    position: str = "before"
    decimal_places: int = 2
    thousands_separator: str = ","
    decimal_separator: str = "."

    def __post_init__(self) -> None:
        """Validate symbol position and decimal places."""
        if self.position not in ("before", "after"):
            raise ValueError("Currency position must be 'before' or 'after'.")
        if self.decimal_places < 0:
            raise ValueError("Decimal places must be non-negative.")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CurrencyFormat":
        default = cls()
        return cls(
            code=data.get("code", default.code),
            symbol=data.get("symbol", default.symbol),
            position=data.get("position", default.position),
            decimal_places=int(data.get("decimalPlaces", default.decimal_places)),
            thousands_separator=data.get("thousandsSeparator", default.thousands_separator),
            decimal_separator=data.get("decimalSeparator", default.decimal_separator),
        )


def _format_number(amount: float, fmt: CurrencyFormat) -> str:
    quantum = Decimal(1).scaleb(-fmt.decimal_places)
    fixed = Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if fixed < 0 else ""
    integer_part, _, decimal_part = f"{abs(fixed):f}".partition(".")
    grouped = f"{int(integer_part):,}".replace(",", fmt.thousands_separator)
    if fmt.decimal_places > 0 and decimal_part:
        return f"{sign}{grouped}{fmt.decimal_separator}{decimal_part}"
    return f"{sign}{grouped}"


def format_currency(amount: float, fmt: CurrencyFormat | None = None) -> str:
    """Render ``amount`` with separators, fixed decimals and symbol.

    Parameters
    ----------
    amount : float
        Value to format.
    fmt : CurrencyFormat, optional
        Formatting rules. Defaults to US dollars.

    Returns
    -------
    str
        E.g. ``"$1,234.50"`` or ``"1.234,50€"``.
    """
    fmt = fmt or CurrencyFormat()
    number = _format_number(amount, fmt)
    if fmt.position == "after":
        return f"{number}{fmt.symbol}"
    return f"{fmt.symbol}{number}"
