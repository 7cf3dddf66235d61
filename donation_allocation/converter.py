"""Conversion between percentage-of-total and fixed-amount allocations.

All rounding in the package goes through :func:`round2`: two decimal
places, half away from zero, computed on the decimal representation of
the inputs so that ``0.125`` becomes ``0.13`` rather than ``0.12``.
"""

import math
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from donation_allocation.models import AllocationMode, BasketEntry

_CENT = Decimal("0.01")
_HUNDRED = Decimal(100)


def _dec(value: float | int | str | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round2(value: float | int | str | Decimal) -> float:
    """Round to two decimal places, half-up.

    Parameters
    ----------
    value : float | int | str | Decimal
        Number to round.

    Returns
    -------
    float
    """
    return float(_dec(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def sum2(values: Iterable[float]) -> float:
    """Sum money-like values exactly and round the result to two places."""
    total = sum((_dec(v) for v in values), Decimal(0))
    return float(total.quantize(_CENT, rounding=ROUND_HALF_UP))


def parse_value(raw: object) -> float:
    """Interpret user input as a number; empty, non-numeric or non-finite input is 0."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float, Decimal)):
        value = _dec(raw)
    else:
        try:
            value = Decimal(str(raw).strip())
        except InvalidOperation:
            return 0.0
    if not value.is_finite():
        return 0.0
    result = float(value)
    if not math.isfinite(result):
        return 0.0
    return result


def from_percentage(total_amount: float, percentage: float) -> float:
    """Amount that ``percentage`` of ``total_amount`` represents.

    Parameters
    ----------
    total_amount : float
        Basket total.
    percentage : float
        Share of the total, 0-100.

    Returns
    -------
    float
        ``round2(total_amount * percentage / 100)``; 0 when there is no total.
    """
    if total_amount <= 0:
        return 0.0
    return round2(_dec(total_amount) * _dec(percentage) / _HUNDRED)


def from_amount(total_amount: float, amount: float) -> float:
    """Percentage of ``total_amount`` that ``amount`` represents.

    Parameters
    ----------
    total_amount : float
        Basket total.
    amount : float
        Fixed sub-amount.

    Returns
    -------
    float
        ``round2(amount / total_amount * 100)``, or 0 when
        ``total_amount <= 0``.
    """
    if total_amount <= 0:
        return 0.0
    return round2(_dec(amount) / _dec(total_amount) * _HUNDRED)


def apply_value(entry: BasketEntry, total_amount: float, mode: AllocationMode, value: float) -> None:
    """Set the directly edited field of ``entry`` and derive the other one."""
    if mode is AllocationMode.PERCENTAGE:
        entry.percentage = value
        entry.amount = from_percentage(total_amount, value)
    else:
        entry.amount = value
        entry.percentage = from_amount(total_amount, value)


def recompute_entries(entries: list[BasketEntry], total_amount: float, mode: AllocationMode) -> None:
    """Re-derive every entry after the basket total changed.

    In percentage mode the stored percentages are authoritative and amounts
    follow. In fixed mode the stored amounts are authoritative and
    percentages follow. Without a total, percentage-mode amounts drop to 0
    and fixed-mode entries are left for recomputation once a total exists.
    """
    if mode is AllocationMode.PERCENTAGE:
        for entry in entries:
            entry.amount = from_percentage(total_amount, entry.percentage)
    elif total_amount > 0:
        for entry in entries:
            entry.percentage = from_amount(total_amount, entry.amount)
