"""Basket of selected causes sharing one donation total."""

import logging

from donation_allocation.converter import apply_value, parse_value, recompute_entries, sum2
from donation_allocation.models import AllocationMode, BasketEntry, Cause

logger = logging.getLogger(__name__)


class Basket:
    """Ordered set of causes with their allocations.

    Entries keep insertion order and hold at most one entry per cause.
    Invariants on the totals are checked by
    :func:`donation_allocation.validator.validate`, not on every mutation.

    Parameters
    ----------
    mode : AllocationMode
        Initial allocation mode. Defaults to percentages.
    """

    def __init__(self, mode: AllocationMode = AllocationMode.PERCENTAGE) -> None:
        self.entries: list[BasketEntry] = []
        self.total_amount: float = 0.0
        self.mode = AllocationMode(mode)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, cause_id: object) -> bool:
        return self.get(cause_id) is not None

    def get(self, cause_id: object) -> BasketEntry | None:
        """Return the entry for ``cause_id`` or ``None``."""
        for entry in self.entries:
            if entry.cause_id == cause_id:
                return entry
        return None

    @property
    def cause_ids(self) -> list[str]:
        return [entry.cause_id for entry in self.entries]

    @property
    def allocated_percentage(self) -> float:
        return sum2(entry.percentage for entry in self.entries)

    @property
    def allocated_amount(self) -> float:
        return sum2(entry.amount for entry in self.entries)

    @property
    def remaining_percentage(self) -> float:
        return sum2([100, -self.allocated_percentage])

    def toggle(self, cause: Cause | str) -> bool:
        """Add the cause if absent, remove it otherwise.

        Removal leaves the other entries untouched; their percentages are
        not renormalized.

        Parameters
        ----------
        cause : Cause | str
            Cause record or its id.

        Returns
        -------
        bool
            ``True`` if the cause was added, ``False`` if removed.
        """
        cause_id = cause.id if isinstance(cause, Cause) else cause
        entry = self.get(cause_id)
        if entry is not None:
            self.entries.remove(entry)
            return False
        self.entries.append(BasketEntry(cause_id=cause_id))
        return True

    def update_entry(self, cause_id: str, raw_value: object) -> BasketEntry | None:
        """Set an entry's allocation from user input in the active mode.

        Unknown ``cause_id`` is logged and ignored.
        """
        entry = self.get(cause_id)
        if entry is None:
            logger.warning("Ignoring allocation update for cause %r not in basket", cause_id)
            return None
        apply_value(entry, self.total_amount, self.mode, parse_value(raw_value))
        return entry

    def set_total_amount(self, value: object) -> None:
        """Store a new total and re-derive every entry for the active mode."""
        self.total_amount = parse_value(value)
        recompute_entries(self.entries, self.total_amount, self.mode)

    def set_mode(self, mode: AllocationMode | str) -> None:
        """Switch the edited field. Existing values are not recomputed."""
        self.mode = AllocationMode(mode)

    def clear(self) -> None:
        """Drop every entry and reset the total."""
        self.entries.clear()
        self.total_amount = 0.0
