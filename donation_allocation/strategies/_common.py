"""Shared helpers for distribution strategies."""

from donation_allocation.basket import Basket
from donation_allocation.strategies._types import DistributionResult


def build_result(strategy: str, basket: Basket, cause_ids: list[str] | None = None) -> DistributionResult:
    """Snapshot the allocations of ``cause_ids`` (default: all entries).

    Parameters
    ----------
    strategy : str
        Strategy identifier.
    basket : Basket
        Basket after the strategy ran.
    cause_ids : list[str], optional
        Causes the strategy assigned. Defaults to every entry.

    Returns
    -------
    DistributionResult
    """
    touched = basket.cause_ids if cause_ids is None else cause_ids
    entries = [basket.get(cid) for cid in touched]
    return {
        "strategy": strategy,
        "percentages": {e.cause_id: e.percentage for e in entries if e is not None},
        "amounts": {e.cause_id: e.amount for e in entries if e is not None},
    }


def empty_result(strategy: str) -> DistributionResult:
    """Build a ``DistributionResult`` for a strategy that assigned nothing."""
    return {"strategy": strategy, "percentages": {}, "amounts": {}}
