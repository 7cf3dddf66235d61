"""Shared fixtures for donation allocation tests."""

import asyncio

import pytest

from donation_allocation.basket import Basket
from donation_allocation.errors import SubmissionError
from donation_allocation.models import Cause


class FakeCatalog:
    """In-memory cause catalog."""

    def __init__(self, causes):
        self.causes = causes
        self.calls = 0

    async def list_causes(self):
        self.calls += 1
        return list(self.causes)


class FakeDonationService:
    """Records payloads; fails with ``error`` when set; waits on ``gate`` when set."""

    def __init__(self, message="Donation successful! Thank you for your contribution.", error=None):
        self.message = message
        self.error = error
        self.payloads = []
        self.gate: asyncio.Event | None = None
        self.started = asyncio.Event()

    async def submit(self, payload):
        self.payloads.append(payload)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise SubmissionError(self.error)
        return self.message


@pytest.fixture()
def sample_causes():
    """Three catalog causes."""
    return [
        Cause(id="c1", name="School Meals", category="education", current_amount=500, target_amount=1000),
        Cause(id="c2", name="Clean Water", category="environment", current_amount=1200, target_amount=1000),
        Cause(id="c3", name="Shelter Fund", category="poverty", current_amount=0, target_amount=0),
    ]


@pytest.fixture()
def basket():
    """Empty basket in percentage mode."""
    return Basket()


@pytest.fixture()
def valid_basket():
    """Two causes, 60/40 of a 200 total."""
    b = Basket()
    b.toggle("c1")
    b.toggle("c2")
    b.set_total_amount(200)
    b.update_entry("c1", 60)
    b.update_entry("c2", 40)
    return b


@pytest.fixture()
def catalog(sample_causes):
    return FakeCatalog(sample_causes)


@pytest.fixture()
def service():
    return FakeDonationService()
