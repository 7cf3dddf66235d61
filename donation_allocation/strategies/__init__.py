"""Distribution strategies for the donation basket.

Provides the even-split and remainder auto-fill strategies, the
``DistributionStrategy`` protocol they satisfy, and the ``StrategyError``
hierarchy raised when a strategy cannot be applied.
"""

from donation_allocation.strategies._common import build_result, empty_result
from donation_allocation.strategies._types import (
    DistributionResult,
    DistributionStrategy,
    InsufficientEntries,
    NegativeRemainder,
    StrategyError,
    ZeroRemainder,
)
from donation_allocation.strategies.auto_fill import AutoFillLast, auto_fill_last
from donation_allocation.strategies.even_split import EvenSplit, distribute_evenly

__all__ = [
    "AutoFillLast",
    "DistributionResult",
    "DistributionStrategy",
    "EvenSplit",
    "InsufficientEntries",
    "NegativeRemainder",
    "StrategyError",
    "ZeroRemainder",
    "auto_fill_last",
    "build_result",
    "distribute_evenly",
    "empty_result",
]
