"""Type definitions for distribution strategies and their failures."""

from typing import Protocol, TypedDict

from donation_allocation.basket import Basket


class DistributionResult(TypedDict):
    """Common output contract all distribution strategies satisfy.

    Parameters
    ----------
    strategy : str
        Identifier for the strategy (e.g. ``"even_split"``).
    percentages : dict[str, float]
        Percentage assigned to each cause the strategy touched.
    amounts : dict[str, float]
        Amount assigned to each cause the strategy touched.
    """

    strategy: str
    percentages: dict[str, float]
    amounts: dict[str, float]


class DistributionStrategy(Protocol):
    """Protocol for strategies that bulk-assign basket allocations.

    Implementations either mutate the basket and return a
    :class:`DistributionResult`, or raise :class:`StrategyError` and leave
    the basket unchanged.
    """

    def __call__(self, basket: Basket) -> DistributionResult: ...


class StrategyError(Exception):
    """A distribution strategy could not be applied to the basket."""

    message = "Allocation strategy could not be applied"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InsufficientEntries(StrategyError):
    """Too few basket entries for the strategy."""

    message = "Need at least 2 causes to auto-fill the last one"


class NegativeRemainder(StrategyError):
    """The other entries already exceed 100%."""

    message = "Total percentage of other causes exceeds 100%"


class ZeroRemainder(StrategyError):
    """Nothing is left to allocate."""

    message = "No remaining percentage to allocate"
