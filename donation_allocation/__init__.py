"""Multi-cause donation allocation engine."""

from donation_allocation.adapter import SubmissionAdapter, build_payload
from donation_allocation.basket import Basket
from donation_allocation.config import PlatformConfig, PlatformConfigProvider
from donation_allocation.converter import from_amount, from_percentage, round2
from donation_allocation.models import AllocationMode, BasketEntry, Cause, MinimumDonationPolicy
from donation_allocation.session import DonationSession
from donation_allocation.strategies import (
    InsufficientEntries,
    NegativeRemainder,
    StrategyError,
    ZeroRemainder,
    auto_fill_last,
    distribute_evenly,
)
from donation_allocation.validator import validate

__all__ = [
    "AllocationMode",
    "Basket",
    "BasketEntry",
    "Cause",
    "DonationSession",
    "InsufficientEntries",
    "MinimumDonationPolicy",
    "NegativeRemainder",
    "PlatformConfig",
    "PlatformConfigProvider",
    "StrategyError",
    "SubmissionAdapter",
    "ZeroRemainder",
    "auto_fill_last",
    "build_payload",
    "distribute_evenly",
    "from_amount",
    "from_percentage",
    "round2",
    "validate",
]
