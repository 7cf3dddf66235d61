"""Remainder auto-fill: give the last entry whatever is left of 100%."""

import logging

from donation_allocation.basket import Basket
from donation_allocation.converter import from_percentage, sum2
from donation_allocation.strategies._common import build_result
from donation_allocation.strategies._types import (
    DistributionResult,
    InsufficientEntries,
    NegativeRemainder,
    ZeroRemainder,
)

logger = logging.getLogger(__name__)


class AutoFillLast:
    """Remainder auto-fill strategy.

    Sets the last entry's percentage to ``100 - sum(others)`` and derives
    its amount from the basket total. The basket is not modified when the
    strategy fails.

    Raises
    ------
    InsufficientEntries
        Fewer than two entries.
    NegativeRemainder
        The other entries already exceed 100%.
    ZeroRemainder
        The other entries sum to exactly 100%.
    """

    name = "auto_fill_last"

    def __call__(self, basket: Basket) -> DistributionResult:
        """Fill the last basket entry with the remaining percentage.

        Parameters
        ----------
        basket : Basket
            Basket with at least two entries; mutated in place on success.

        Returns
        -------
        DistributionResult
            Contains only the last entry.
        """
        if len(basket.entries) < 2:
            raise InsufficientEntries()

        others, last = basket.entries[:-1], basket.entries[-1]
        remaining = sum2([100] + [-e.percentage for e in others])
        if remaining < 0:
            raise NegativeRemainder()
        if remaining == 0:
            raise ZeroRemainder()

        last.percentage = remaining
        last.amount = from_percentage(basket.total_amount, remaining)
        logger.info("Auto-filled cause %s with %.2f%%", last.cause_id, remaining)
        return build_result(self.name, basket, [last.cause_id])


def auto_fill_last(basket: Basket) -> DistributionResult:
    """Apply :class:`AutoFillLast` to ``basket``."""
    return AutoFillLast()(basket)
