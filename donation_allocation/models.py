"""Data models for multi-cause donation allocation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

CATEGORY_LABELS: dict[str, str] = {
    "education": "Education",
    "healthcare": "Healthcare",
    "environment": "Environment",
    "disaster-relief": "Disaster Relief",
    "poverty": "Poverty",
    "animal-welfare": "Animal Welfare",
    "other": "Other",
}


def category_label(category: str) -> str:
    """Return the display label for a cause category slug."""
    return CATEGORY_LABELS.get(category, category)


class AllocationMode(str, Enum):
    """Which field of a basket entry the contributor edits directly."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


@dataclass(frozen=True)
class Cause:
    """A donatable cause as supplied by the catalog service.

    Parameters
    ----------
    id : str
        Opaque unique identifier.
    name : str
        Display name.
    category : str
        Category slug, e.g. ``"education"``.
    current_amount : float
        Amount raised so far.
    target_amount : float
        Fundraising goal.
    """

    id: str
    name: str
    category: str = "other"
    current_amount: float = 0.0
    target_amount: float = 0.0

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> "Cause":
        """Build a cause from a catalog record (``_id`` or ``id`` key)."""
        cause_id = record.get("_id", record.get("id"))
        if cause_id is None:
            raise ValueError("Cause record has no id")
        return cls(
            id=str(cause_id),
            name=record.get("name", ""),
            category=record.get("category", "other"),
            current_amount=float(record.get("currentAmount") or 0),
            target_amount=float(record.get("targetAmount") or 0),
        )

    @property
    def progress(self) -> float:
        """Percentage of the target raised, capped at 100."""
        if self.target_amount <= 0:
            return 0.0
        return min(self.current_amount / self.target_amount * 100, 100.0)


@dataclass
class BasketEntry:
    """One cause in the basket with its allocation.

    ``amount`` equals ``round2(total * percentage / 100)`` whenever the
    basket total is positive. Without a total, ``amount`` is 0 while
    ``percentage`` may already be set.
    """

    cause_id: str
    percentage: float = 0.0
    amount: float = 0.0


@dataclass(frozen=True)
class MinimumDonationPolicy:
    """Minimum-donation rule applied to the basket total.

    Parameters
    ----------
    amount : float
        Smallest accepted total.
    enabled : bool
        Whether the rule is enforced.
    """

    amount: float = 1.0
    enabled: bool = True

    def __post_init__(self) -> None:
        """Reject negative minimums."""
        if self.amount < 0:
            raise ValueError("Minimum donation amount must be non-negative.")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MinimumDonationPolicy":
        return cls(amount=float(data.get("amount", 1)), enabled=bool(data.get("enabled", True)))


@dataclass(frozen=True)
class Notice:
    """Transient message surfaced to the contributor."""

    level: str
    message: str


@dataclass
class SubmissionOutcome:
    """Result of one submission attempt.

    Parameters
    ----------
    success : bool
        Whether the donation service accepted the payload.
    message : str
        Service message, or a generic fallback.
    applied : bool
        ``False`` when the result arrived after the owning session closed
        and was therefore discarded.
    """

    success: bool
    message: str
    applied: bool = True
    payload: dict[str, Any] = field(default_factory=dict)
