"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from invitely.config import Settings
from invitely.domain.repository import (
    AdminRepository,
    AnalyticsRepository,
    GuestRepository,
    InvitationRepository,
    ResellerRepository,
    TemplateRepository,
    UserRepository,
)
from invitely.persistence.database import create_engine, create_session_factory
from invitely.persistence.repository import (
    PostgresAdminRepository,
    PostgresAnalyticsRepository,
    PostgresGuestRepository,
    PostgresInvitationRepository,
    PostgresResellerRepository,
    PostgresTemplateRepository,
    PostgresUserRepository,
)
from invitely.util.di.base import ProviderBase
from invitely.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide one session per request.

        Committed when the request finishes cleanly, rolled back otherwise.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_reseller_repository(self, session: AsyncSession) -> ResellerRepository:
        """Provide Reseller repository."""
        return PostgresResellerRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_admin_repository(self, session: AsyncSession) -> AdminRepository:
        """Provide Admin repository."""
        return PostgresAdminRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_template_repository(self, session: AsyncSession) -> TemplateRepository:
        """Provide Template repository."""
        return PostgresTemplateRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(
        self, session: AsyncSession
    ) -> InvitationRepository:
        """Provide Invitation repository."""
        return PostgresInvitationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_guest_repository(self, session: AsyncSession) -> GuestRepository:
        """Provide Guest repository."""
        return PostgresGuestRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_analytics_repository(self, session: AsyncSession) -> AnalyticsRepository:
        """Provide Analytics repository."""
        return PostgresAnalyticsRepository(session)
