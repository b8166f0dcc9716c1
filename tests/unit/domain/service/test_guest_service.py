"""Unit tests for GuestService (guest lists and RSVPs)."""

from datetime import timedelta
from uuid import uuid4

import pytest

from invitely.domain.error import BusinessRuleViolationError, NotFoundError
from invitely.domain.model.common import utcnow
from invitely.domain.repository import AnalyticsRepository, InvitationRepository
from invitely.domain.service import GuestService, InvitationService
from invitely.domain.value import (
    AnalyticsEventType,
    GuestId,
    GuestResponse,
    InvitationCategory,
    PageRequest,
    UserId,
)
from tests.factories import wedding_form_data
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

OWNER = UserId(uuid4())


async def _published(unit_env, **kwargs):
    invitations = await unit_env.get(InvitationService)
    invitation = await invitations.create(
        user_id=OWNER,
        title="Sarah & John Wedding",
        category=InvitationCategory.WEDDING,
        form_data=wedding_form_data(),
        **kwargs,
    )
    return await invitations.publish(invitation.id, OWNER)


class TestGuestList:
    """Tests for managing an invitation's guest list."""

    @pytest.mark.asyncio
    async def test_added_guest_is_pending(self, unit_env):
        service = await unit_env.get(GuestService)
        invitation = await _published(unit_env)

        guest = await service.add_guest(
            invitation.id, name="Aunt May", email="may@example.com", plus_ones_count=1
        )
        items, total = await service.list_guests(invitation.id, PageRequest())

        assert guest.response == GuestResponse.PENDING
        assert total == 1
        assert items[0].id == guest.id

    @pytest.mark.asyncio
    async def test_remove_guest(self, unit_env):
        service = await unit_env.get(GuestService)
        invitation = await _published(unit_env)
        guest = await service.add_guest(invitation.id, name="Aunt May")

        await service.remove_guest(invitation.id, guest.id)

        _, total = await service.list_guests(invitation.id, PageRequest())
        assert total == 0

    @pytest.mark.asyncio
    async def test_remove_guest_of_other_invitation(self, unit_env):
        service = await unit_env.get(GuestService)
        first = await _published(unit_env)
        second = await _published(unit_env)
        guest = await service.add_guest(first.id, name="Aunt May")

        with pytest.raises(NotFoundError):
            await service.remove_guest(second.id, guest.id)
        with pytest.raises(NotFoundError):
            await service.remove_guest(first.id, GuestId(uuid4()))


class TestRsvp:
    """Tests for GuestService.submit_rsvp()."""

    @pytest.mark.asyncio
    async def test_attending_counts_as_confirmed(self, unit_env):
        service = await unit_env.get(GuestService)
        repo = await unit_env.get(InvitationRepository)
        invitation = await _published(unit_env)

        await service.submit_rsvp(invitation, "Aunt May", GuestResponse.ATTENDING)
        await service.submit_rsvp(invitation, "Uncle Ben", GuestResponse.MAYBE)

        stored = await repo.find_by_id(invitation.id)
        assert stored.rsvp_count == 2
        assert stored.confirmed_count == 1

    @pytest.mark.asyncio
    async def test_rsvp_is_recorded_as_event(self, unit_env):
        service = await unit_env.get(GuestService)
        analytics = await unit_env.get(AnalyticsRepository)
        invitation = await _published(unit_env)

        guest = await service.submit_rsvp(
            invitation, "Aunt May", GuestResponse.NOT_ATTENDING
        )

        assert guest.response_submitted_at is not None
        rsvps = [e for e in analytics.events if e.event_type == AnalyticsEventType.RSVP]
        assert len(rsvps) == 1
        assert rsvps[0].event_data == {
            "response": "not_attending",
            "guest_id": str(guest.id),
        }

    @pytest.mark.asyncio
    async def test_rsvp_disabled(self, unit_env):
        service = await unit_env.get(GuestService)
        invitation = await _published(unit_env, rsvp_enabled=False)

        with pytest.raises(BusinessRuleViolationError):
            await service.submit_rsvp(invitation, "Aunt May", GuestResponse.ATTENDING)

    @pytest.mark.asyncio
    async def test_deadline_passed(self, unit_env):
        service = await unit_env.get(GuestService)
        invitation = await _published(
            unit_env, rsvp_deadline=utcnow() - timedelta(days=1)
        )

        with pytest.raises(BusinessRuleViolationError, match="deadline"):
            await service.submit_rsvp(invitation, "Aunt May", GuestResponse.ATTENDING)

    @pytest.mark.asyncio
    async def test_pending_is_not_an_answer(self, unit_env):
        service = await unit_env.get(GuestService)
        repo = await unit_env.get(InvitationRepository)
        invitation = await _published(unit_env)

        with pytest.raises(BusinessRuleViolationError):
            await service.submit_rsvp(invitation, "Aunt May", GuestResponse.PENDING)

        assert (await repo.find_by_id(invitation.id)).rsvp_count == 0


@pytest.mark.asyncio
async def test_response_summary_includes_zeros(unit_env):
    service = await unit_env.get(GuestService)
    invitation = await _published(unit_env)
    await service.add_guest(invitation.id, name="Cousin Vinny")
    await service.submit_rsvp(invitation, "Aunt May", GuestResponse.ATTENDING)

    summary = await service.response_summary(invitation.id)

    assert summary == {
        GuestResponse.PENDING: 1,
        GuestResponse.ATTENDING: 1,
        GuestResponse.NOT_ATTENDING: 0,
        GuestResponse.MAYBE: 0,
    }
