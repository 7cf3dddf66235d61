"""Submission adapter: send a validated basket to the donation service."""

import logging
from collections.abc import Callable
from typing import Any, Protocol

from donation_allocation.basket import Basket
from donation_allocation.errors import SubmissionError, SubmissionInProgress
from donation_allocation.models import SubmissionOutcome

logger = logging.getLogger(__name__)


class DonationService(Protocol):
    """Structural interface for the external donation-submission service."""

    async def submit(self, payload: dict[str, Any]) -> str:
        """Record the donation and return a success message.

        Raises :class:`SubmissionError` on failure.
        """
        ...


def build_payload(basket: Basket) -> dict[str, Any]:
    """Build the service payload from the basket as it stands.

    Amounts are taken from the entries verbatim.

    Parameters
    ----------
    basket : Basket
        Basket that passed validation.

    Returns
    -------
    dict[str, Any]
        ``{"totalAmount": ..., "causes": [{"causeId": ..., "amount": ...}, ...]}``
    """
    return {
        "totalAmount": basket.total_amount,
        "causes": [{"causeId": entry.cause_id, "amount": entry.amount} for entry in basket.entries],
    }


def _always_current() -> bool:
    return True


class SubmissionAdapter:
    """Submit one basket at a time to a :class:`DonationService`.

    Parameters
    ----------
    service : DonationService
        Remote service that records the donation.
    """

    def __init__(self, service: DonationService) -> None:
        self._service = service
        self._in_flight = False

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    async def submit(
        self,
        basket: Basket,
        is_current: Callable[[], bool] = _always_current,
    ) -> SubmissionOutcome:
        """Send the basket and apply the result to it.

        On success the basket is cleared; on failure it is left intact for a
        retry. If ``is_current`` returns ``False`` once the service answers,
        the owner has gone away and the result is discarded without touching
        the basket.

        Parameters
        ----------
        basket : Basket
            Basket that passed validation with no errors.
        is_current : Callable[[], bool]
            Reports whether the basket's owner is still alive.

        Returns
        -------
        SubmissionOutcome

        Raises
        ------
        SubmissionInProgress
            A previous submission through this adapter has not finished.
        """
        if self._in_flight:
            raise SubmissionInProgress("A donation is already being submitted")

        payload = build_payload(basket)
        self._in_flight = True
        try:
            message = await self._service.submit(payload)
            success = True
        except SubmissionError as exc:
            message = exc.message
            success = False
        finally:
            self._in_flight = False

        if not is_current():
            logger.warning("Discarding submission result for a closed basket: success=%s", success)
            return SubmissionOutcome(success=success, message=message, applied=False, payload=payload)

        if success:
            logger.info(
                "Donation submitted: total=%.2f, causes=%d",
                payload["totalAmount"],
                len(payload["causes"]),
            )
            basket.clear()
        else:
            logger.warning("Donation submission failed: %s", message)
        return SubmissionOutcome(success=success, message=message, payload=payload)
