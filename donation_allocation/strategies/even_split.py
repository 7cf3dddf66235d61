"""Even split: divide the basket equally, last entry absorbs rounding.

Every entry but the last receives ``round2(100 / n)`` percent and
``round2(total / n)`` of the total. The last entry receives whatever
remains of 100% and of the total, so both sums come out exact rather than
merely within validation tolerance. When the rounded share times
``n - 1`` would leave nothing for the last entry (very large baskets), the share is
floored to cents instead so the last entry never goes negative.
"""

import logging
from decimal import ROUND_FLOOR, Decimal

from donation_allocation.basket import Basket
from donation_allocation.converter import round2, sum2
from donation_allocation.strategies._common import build_result, empty_result
from donation_allocation.strategies._types import DistributionResult

logger = logging.getLogger(__name__)


def _base_share(whole: float, n: int) -> float:
    """Share of ``whole`` for each of the first ``n - 1`` entries."""
    whole_dec = Decimal(str(whole))
    share = round2(whole / n)
    if Decimal(str(share)) * (n - 1) < whole_dec or whole_dec == 0:
        return share
    return float((whole_dec / n).quantize(Decimal("0.01"), rounding=ROUND_FLOOR))


class EvenSplit:
    """Even-split distribution strategy. A no-op on an empty basket."""

    name = "even_split"

    def __call__(self, basket: Basket) -> DistributionResult:
        """Assign equal shares to every basket entry.

        Parameters
        ----------
        basket : Basket
            Basket to distribute; mutated in place.

        Returns
        -------
        DistributionResult
        """
        n = len(basket.entries)
        if n == 0:
            logger.info("Even split skipped: basket is empty")
            return empty_result(self.name)

        total = basket.total_amount if basket.total_amount > 0 else 0.0
        base_percentage = _base_share(100, n)
        base_amount = _base_share(total, n)

        others, last = basket.entries[:-1], basket.entries[-1]
        for entry in others:
            entry.percentage = base_percentage
            entry.amount = base_amount
        last.percentage = sum2([100] + [-e.percentage for e in others])
        last.amount = sum2([total] + [-e.amount for e in others])

        logger.info(
            "Even split across %d causes: base=%.2f%%, last=%.2f%%",
            n,
            base_percentage,
            last.percentage,
        )
        return build_result(self.name, basket)


def distribute_evenly(basket: Basket) -> DistributionResult:
    """Apply :class:`EvenSplit` to ``basket``."""
    return EvenSplit()(basket)
