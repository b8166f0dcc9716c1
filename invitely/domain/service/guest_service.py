"""Guest list and RSVP domain service."""

from typing import Any, Optional
from uuid import uuid4

import logfire

from invitely.domain.error import BusinessRuleViolationError, NotFoundError
from invitely.domain.model import Invitation, InvitationAnalyticsEvent, InvitationGuest
from invitely.domain.model.common import utcnow
from invitely.domain.repository import (
    AnalyticsRepository,
    GuestRepository,
    InvitationRepository,
)
from invitely.domain.value import (
    AnalyticsEventId,
    AnalyticsEventType,
    GuestId,
    GuestResponse,
    InvitationId,
    PageRequest,
)

from .base import Service


class GuestService(Service):
    """Domain service for an invitation's guests.

    Callers check ownership (or publication, for RSVPs) before calling in.
    """

    def __init__(
        self,
        guest_repository: GuestRepository,
        invitation_repository: InvitationRepository,
        analytics_repository: AnalyticsRepository,
    ) -> None:
        """Initialize guest service.

        Args:
            guest_repository: Guest repository
            invitation_repository: Invitation repository (RSVP counters)
            analytics_repository: Analytics event store
        """
        self.guest_repository = guest_repository
        self.invitation_repository = invitation_repository
        self.analytics_repository = analytics_repository

    async def list_guests(
        self, invitation_id: InvitationId, page: PageRequest
    ) -> tuple[list[InvitationGuest], int]:
        """List an invitation's guests.

        Returns:
            Tuple of (page of guests, total)
        """
        items = await self.guest_repository.find_by_invitation(
            invitation_id, limit=page.limit, offset=page.offset
        )
        total = await self.guest_repository.count_by_invitation(invitation_id)
        return items, total

    async def response_summary(
        self, invitation_id: InvitationId
    ) -> dict[GuestResponse, int]:
        """Count an invitation's guests per response, including zeros."""
        counts = await self.guest_repository.count_by_response(invitation_id)
        return {response: counts.get(response, 0) for response in GuestResponse}

    async def add_guest(
        self,
        invitation_id: InvitationId,
        name: str,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        plus_ones_count: int = 0,
        email_notifications: bool = True,
        sms_notifications: bool = False,
    ) -> InvitationGuest:
        """Add a pending guest to an invitation."""
        with logfire.span(
            "guest_service.add_guest", invitation_id=str(invitation_id)
        ):
            guest = InvitationGuest(
                id=GuestId(uuid4()),
                invitation_id=invitation_id,
                name=name,
                email=email,
                phone=phone,
                plus_ones_count=plus_ones_count,
                email_notifications=email_notifications,
                sms_notifications=sms_notifications,
            )
            saved = await self.guest_repository.save(guest)
            logfire.info(
                "Guest added", invitation_id=str(invitation_id), guest_id=str(saved.id)
            )
            return saved

    async def remove_guest(
        self, invitation_id: InvitationId, guest_id: GuestId
    ) -> None:
        """Remove a guest from an invitation.

        Raises:
            NotFoundError: If the guest does not belong to the invitation
        """
        guest = await self.guest_repository.find_by_id(guest_id)
        if guest is None or guest.invitation_id != invitation_id:
            raise NotFoundError("Guest", str(guest_id))
        await self.guest_repository.delete(guest_id)
        logfire.info(
            "Guest removed", invitation_id=str(invitation_id), guest_id=str(guest_id)
        )

    async def submit_rsvp(
        self,
        invitation: Invitation,
        name: str,
        response: GuestResponse,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        plus_ones_count: int = 0,
        response_data: Optional[dict[str, Any]] = None,
    ) -> InvitationGuest:
        """Record a guest's answer to a published invitation.

        Raises:
            BusinessRuleViolationError: If RSVPs are closed or the answer is pending
        """
        with logfire.span(
            "guest_service.submit_rsvp",
            invitation_id=str(invitation.id),
            response=response.value,
        ):
            now = utcnow()
            if not invitation.rsvp_enabled:
                raise BusinessRuleViolationError("RSVP is not enabled for this invitation")
            if invitation.rsvp_deadline is not None and invitation.rsvp_deadline < now:
                raise BusinessRuleViolationError("The RSVP deadline has passed")
            if response == GuestResponse.PENDING:
                raise BusinessRuleViolationError("An RSVP needs a response")

            guest = InvitationGuest(
                id=GuestId(uuid4()),
                invitation_id=invitation.id,
                name=name,
                email=email,
                phone=phone,
                response=response,
                response_data=response_data or {},
                plus_ones_count=plus_ones_count,
                invitation_opened_at=now,
                response_submitted_at=now,
            )
            saved = await self.guest_repository.save(guest)
            await self.invitation_repository.increment_rsvp_counts(
                invitation.id, confirmed=response == GuestResponse.ATTENDING
            )
            await self.analytics_repository.record(
                InvitationAnalyticsEvent(
                    id=AnalyticsEventId(uuid4()),
                    invitation_id=invitation.id,
                    event_type=AnalyticsEventType.RSVP,
                    event_data={"response": response.value, "guest_id": str(saved.id)},
                )
            )
            logfire.info(
                "RSVP recorded",
                invitation_id=str(invitation.id),
                guest_id=str(saved.id),
                response=response.value,
            )
            return saved
