"""PostgreSQL implementation of Analytics repository."""

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from invitely.domain.model import InvitationAnalyticsEvent
from invitely.domain.repository import AnalyticsRepository
from invitely.domain.value import AnalyticsEventType, InvitationId
from invitely.persistence.mappers import analytics_event_to_dict
from invitely.persistence.tables import invitation_analytics_table


class PostgresAnalyticsRepository(AnalyticsRepository):
    """PostgreSQL implementation of AnalyticsRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def record(self, event: InvitationAnalyticsEvent) -> None:
        """Append an event inside a savepoint.

        Tracking is best-effort, so a failed insert must not roll back the
        request's other writes.
        """
        async with self.session.begin_nested():
            await self.session.execute(
                insert(invitation_analytics_table).values(
                    **analytics_event_to_dict(event)
                )
            )

    async def count_by_type(
        self, invitation_id: InvitationId
    ) -> dict[AnalyticsEventType, int]:
        """Count an invitation's events per type."""
        stmt = (
            select(invitation_analytics_table.c.event_type, func.count())
            .where(invitation_analytics_table.c.invitation_id == invitation_id)
            .group_by(invitation_analytics_table.c.event_type)
        )
        result = await self.session.execute(stmt)
        return {AnalyticsEventType(t): n for t, n in result.all()}
