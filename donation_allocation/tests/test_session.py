"""Integration tests for the donation session."""

import asyncio

import pytest

from conftest import FakeDonationService
from donation_allocation.config import PlatformConfig, PlatformConfigProvider
from donation_allocation.errors import SubmissionInProgress
from donation_allocation.models import AllocationMode, MinimumDonationPolicy
from donation_allocation.session import DonationSession


@pytest.fixture()
def session(catalog, service):
    return DonationSession(catalog, service)


@pytest.fixture()
async def loaded_session(session):
    await session.load_causes()
    return session


class TestCatalog:
    @pytest.mark.asyncio
    async def test_load_causes(self, session, catalog):
        causes = await session.load_causes()
        assert [c.id for c in causes] == ["c1", "c2", "c3"]
        assert session.causes == causes

    @pytest.mark.asyncio
    async def test_closed_session_ignores_catalog(self, session):
        session.close()
        await session.load_causes()
        assert session.causes == []


class TestBasketFlow:
    @pytest.mark.asyncio
    async def test_toggle_notices(self, loaded_session):
        assert loaded_session.toggle("c1").message == "School Meals added to basket"
        assert loaded_session.toggle("c1").message == "School Meals removed from basket"

    def test_toggle_unknown_cause_uses_id(self, session):
        assert session.toggle("x9").message == "x9 added to basket"

    @pytest.mark.asyncio
    async def test_distribute_and_submit(self, loaded_session, service):
        for cid in ["c1", "c2", "c3"]:
            loaded_session.toggle(cid)
        loaded_session.set_total_amount("300")
        assert loaded_session.distribute_evenly() is None
        assert loaded_session.validate() == {}

        outcome = await loaded_session.submit()

        assert outcome.success
        assert service.payloads[0]["totalAmount"] == 300.0
        assert [c["amount"] for c in service.payloads[0]["causes"]] == [100.0, 100.0, 100.0]
        assert len(loaded_session.basket) == 0

    def test_auto_fill_success_notice(self, session):
        session.toggle("a")
        session.toggle("b")
        session.set_total_amount(200)
        session.update_allocation("a", 60)
        notice = session.auto_fill_last()
        assert notice.level == "success"
        assert notice.message == "Last cause allocated 40.00% automatically!"

    def test_auto_fill_failure_is_notice(self, session):
        session.toggle("a")
        notice = session.auto_fill_last()
        assert notice.level == "error"
        assert "at least 2 causes" in notice.message
        assert session.basket.entries[0].percentage == 0.0

    def test_fixed_mode(self, catalog, service):
        session = DonationSession(catalog, service, mode=AllocationMode.FIXED)
        session.toggle("a")
        session.toggle("b")
        session.set_total_amount(80)
        session.update_allocation("a", 20)
        session.update_allocation("b", 60)
        assert [e.percentage for e in session.basket.entries] == [25.0, 75.0]
        assert session.validate() == {}

    def test_total_change_clears_errors(self, session):
        session.toggle("a")
        assert session.validate()
        session.set_total_amount(50)
        assert session.errors == {}

    def test_removal_requires_redistribution(self, session):
        session.toggle("A")
        session.toggle("B")
        session.set_total_amount(100)
        session.update_allocation("A", 40)
        session.update_allocation("B", 60)
        session.toggle("A")
        assert "percentage" in session.validate()
        session.distribute_evenly()
        assert session.validate() == {}


class TestSubmission:
    @pytest.mark.asyncio
    async def test_invalid_basket_not_sent(self, session, service):
        outcome = await session.submit()
        assert not outcome.success
        assert service.payloads == []
        assert set(session.errors) >= {"totalAmount", "basket"}

    @pytest.mark.asyncio
    async def test_failure_preserves_basket_for_retry(self, catalog):
        service = FakeDonationService(error="Some causes are not active: Clean Water")
        session = DonationSession(catalog, service)
        session.toggle("c1")
        session.set_total_amount(50)
        session.update_allocation("c1", 100)
        outcome = await session.submit()
        assert outcome.message == "Some causes are not active: Clean Water"
        service.error = None
        assert (await session.submit()).success
        assert len(service.payloads) == 2

    @pytest.mark.asyncio
    async def test_concurrent_submit_rejected(self, session, service):
        service.gate = asyncio.Event()
        session.toggle("c1")
        session.set_total_amount(50)
        session.update_allocation("c1", 100)
        pending = asyncio.create_task(session.submit())
        await service.started.wait()
        assert session.submitting
        with pytest.raises(SubmissionInProgress):
            await session.submit()
        service.gate.set()
        assert (await pending).success

    @pytest.mark.asyncio
    async def test_result_after_close_is_discarded(self, session, service):
        service.gate = asyncio.Event()
        session.toggle("c1")
        session.set_total_amount(50)
        session.update_allocation("c1", 100)
        pending = asyncio.create_task(session.submit())
        await service.started.wait()
        session.close()
        service.gate.set()
        outcome = await pending
        assert not outcome.applied
        assert session.basket.cause_ids == ["c1"]


class TestConfigChanges:
    def test_policy_reread_after_change(self, catalog, service):
        provider = PlatformConfigProvider()
        session = DonationSession(catalog, service, provider)
        session.toggle("c1")
        session.set_total_amount(3)
        session.update_allocation("c1", 100)
        assert session.validate() == {}

        provider.update(PlatformConfig(minimum_donation=MinimumDonationPolicy(amount=5)))

        assert session.validate() == {"totalAmount": "Total donation amount must be at least $5.00"}

    def test_close_unsubscribes(self, catalog, service):
        provider = PlatformConfigProvider()
        session = DonationSession(catalog, service, provider)
        session.close()
        provider.update(PlatformConfig(minimum_donation=MinimumDonationPolicy(amount=5)))
        assert session.config.minimum_donation.amount == 1
