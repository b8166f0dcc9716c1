"""In-memory analytics repository for testing."""

from invitely.domain.model.analytics import InvitationAnalyticsEvent
from invitely.domain.repository.analytics import AnalyticsRepository
from invitely.domain.value import AnalyticsEventType, InvitationId


class InMemoryAnalyticsRepository(AnalyticsRepository):
    """In-memory implementation of AnalyticsRepository for testing."""

    def __init__(self) -> None:
        self.events: list[InvitationAnalyticsEvent] = []

    async def record(self, event: InvitationAnalyticsEvent) -> None:
        """Append an event."""
        self.events.append(event)

    async def count_by_type(
        self, invitation_id: InvitationId
    ) -> dict[AnalyticsEventType, int]:
        """Count an invitation's events per type."""
        counts: dict[AnalyticsEventType, int] = {}
        for event in self.events:
            if event.invitation_id == invitation_id:
                counts[event.event_type] = counts.get(event.event_type, 0) + 1
        return counts
