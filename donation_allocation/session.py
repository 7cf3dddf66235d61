"""Donation session: owns one basket for one contributor.

Wires the cause catalog, platform configuration, distribution strategies,
validator and submission adapter together. All basket mutations are
synchronous; only :meth:`DonationSession.load_causes` and
:meth:`DonationSession.submit` suspend.
"""

import logging
from typing import Protocol

from donation_allocation.adapter import DonationService, SubmissionAdapter
from donation_allocation.basket import Basket
from donation_allocation.config import PlatformConfig, PlatformConfigProvider
from donation_allocation.models import AllocationMode, Cause, Notice, SubmissionOutcome
from donation_allocation.strategies import AutoFillLast, DistributionStrategy, EvenSplit, StrategyError
from donation_allocation.validator import ErrorMap, validate

logger = logging.getLogger(__name__)


class CauseCatalog(Protocol):
    """Structural interface for the cause catalog provider."""

    async def list_causes(self) -> list[Cause]: ...


class DonationSession:
    """Multi-cause donation flow for a single contributor.

    Parameters
    ----------
    catalog : CauseCatalog
        Supplies the donatable causes.
    service : DonationService
        Records submitted donations.
    config : PlatformConfigProvider, optional
        Source of the minimum-donation policy and currency format. The
        session subscribes to it and re-reads the policy after every change.
    mode : AllocationMode
        Initial allocation mode.
    """

    def __init__(
        self,
        catalog: CauseCatalog,
        service: DonationService,
        config: PlatformConfigProvider | None = None,
        mode: AllocationMode = AllocationMode.PERCENTAGE,
    ) -> None:
        self.basket = Basket(mode)
        self.causes: list[Cause] = []
        self.errors: ErrorMap = {}
        self._catalog = catalog
        self._adapter = SubmissionAdapter(service)
        self._config_provider = config or PlatformConfigProvider()
        self._config = self._config_provider.config
        self._config_stale = False
        self._closed = False
        self._unsubscribe = self._config_provider.subscribe(self._on_config_change)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def submitting(self) -> bool:
        return self._adapter.in_flight

    @property
    def config(self) -> PlatformConfig:
        if self._config_stale:
            self._config = self._config_provider.config
            self._config_stale = False
        return self._config

    def _on_config_change(self, config: PlatformConfig) -> None:
        self._config_stale = True

    def _is_current(self) -> bool:
        return not self._closed

    def _cause(self, cause_id: str) -> Cause | None:
        for cause in self.causes:
            if cause.id == cause_id:
                return cause
        return None

    async def load_causes(self) -> list[Cause]:
        """Fetch the catalog. Errors propagate as :class:`CatalogError`."""
        causes = await self._catalog.list_causes()
        if self._closed:
            logger.warning("Discarding cause catalog for a closed session")
            return causes
        self.causes = causes
        return causes

    def toggle(self, cause_id: str) -> Notice:
        """Add a catalog cause to the basket or remove it."""
        cause = self._cause(cause_id)
        name = cause.name if cause is not None else cause_id
        added = self.basket.toggle(cause if cause is not None else cause_id)
        self.errors = {}
        return Notice("info", f"{name} {'added to' if added else 'removed from'} basket")

    def update_allocation(self, cause_id: str, raw_value: object) -> None:
        self.basket.update_entry(cause_id, raw_value)
        self.errors = {}

    def set_total_amount(self, value: object) -> None:
        self.basket.set_total_amount(value)
        self.errors = {}

    def set_mode(self, mode: AllocationMode | str) -> None:
        self.basket.set_mode(mode)
        self.errors = {}

    def apply(self, strategy: DistributionStrategy) -> Notice | None:
        """Run a distribution strategy; failures become error notices.

        Returns
        -------
        Notice | None
            An error notice when the strategy failed, otherwise ``None``.
        """
        try:
            strategy(self.basket)
        except StrategyError as exc:
            logger.warning("Strategy %s failed: %s", type(strategy).__name__, exc)
            return Notice("error", str(exc))
        self.errors = {}
        return None

    def distribute_evenly(self) -> Notice | None:
        return self.apply(EvenSplit())

    def auto_fill_last(self) -> Notice:
        notice = self.apply(AutoFillLast())
        if notice is not None:
            return notice
        last = self.basket.entries[-1]
        return Notice("success", f"Last cause allocated {last.percentage:.2f}% automatically!")

    def validate(self) -> ErrorMap:
        """Validate the basket against the current minimum-donation policy."""
        config = self.config
        self.errors = validate(self.basket, config.minimum_donation, config.currency)
        return self.errors

    async def submit(self) -> SubmissionOutcome:
        """Validate and, if clean, submit the basket.

        Raises
        ------
        SubmissionInProgress
            A previous submission has not finished.
        """
        if self.validate():
            return SubmissionOutcome(success=False, message="Please fix the errors in your donation")
        outcome = await self._adapter.submit(self.basket, is_current=self._is_current)
        if outcome.applied and outcome.success:
            self.errors = {}
        return outcome

    def close(self) -> None:
        """Tear the session down; pending results will be discarded."""
        if self._closed:
            return
        self._closed = True
        self._unsubscribe()
