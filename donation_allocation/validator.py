"""Basket-level validation gating donation submission."""

import logging

from donation_allocation.basket import Basket
from donation_allocation.converter import sum2
from donation_allocation.currency import CurrencyFormat, format_currency
from donation_allocation.models import MinimumDonationPolicy

logger = logging.getLogger(__name__)

PERCENTAGE_TOLERANCE = 0.1
AMOUNT_TOLERANCE = 0.01

ErrorMap = dict[str, str]


def validate(
    basket: Basket,
    policy: MinimumDonationPolicy | None = None,
    currency: CurrencyFormat | None = None,
) -> ErrorMap:
    """Check every basket invariant and report all violations together.

    Parameters
    ----------
    basket : Basket
        Basket about to be submitted.
    policy : MinimumDonationPolicy, optional
        Minimum-donation rule. Defaults to an enabled minimum of 1.
    currency : CurrencyFormat, optional
        Formatting for amounts quoted in messages.

    Returns
    -------
    ErrorMap
        Mapping from field key (``totalAmount``, ``basket``, ``allocations``,
        ``percentage``, ``amount``) to message. Empty when the basket may be
        submitted.
    """
    policy = policy or MinimumDonationPolicy()
    errors: ErrorMap = {}
    total = basket.total_amount

    if total <= 0:
        errors["totalAmount"] = "Please enter a total donation amount greater than 0"
    elif policy.enabled and total < policy.amount:
        errors["totalAmount"] = (
            f"Total donation amount must be at least {format_currency(policy.amount, currency)}"
        )

    if not basket.entries:
        errors["basket"] = "Please add at least one cause to your donation basket"
    else:
        if any(entry.amount <= 0 for entry in basket.entries):
            errors["allocations"] = "All causes must have an allocation greater than 0"

        allocated_percentage = basket.allocated_percentage
        if abs(sum2([allocated_percentage, -100])) > PERCENTAGE_TOLERANCE:
            errors["percentage"] = f"Allocations must sum to 100% (currently {allocated_percentage:.2f}%)"

        allocated_amount = basket.allocated_amount
        if abs(sum2([allocated_amount, -total])) > AMOUNT_TOLERANCE:
            errors["amount"] = (
                "Allocated amounts must equal total amount "
                f"(currently {format_currency(allocated_amount, currency)} "
                f"of {format_currency(total, currency)})"
            )

    if errors:
        logger.info("Basket validation failed: %s", ", ".join(sorted(errors)))
    return errors
