"""Analytics event repository interface."""

from abc import ABC, abstractmethod

from invitely.domain.model import InvitationAnalyticsEvent
from invitely.domain.value import AnalyticsEventType, InvitationId


class AnalyticsRepository(ABC):
    """Append-only store of invitation analytics events."""

    @abstractmethod
    async def record(self, event: InvitationAnalyticsEvent) -> None:
        """Append an event."""
        pass

    @abstractmethod
    async def count_by_type(
        self, invitation_id: InvitationId
    ) -> dict[AnalyticsEventType, int]:
        """Count an invitation's events per type."""
        pass
