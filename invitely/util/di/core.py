"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from invitely.config import (
    AuthSettings,
    InvitationSettings,
    PaginationSettings,
    Settings,
)
from invitely.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Configuration provider.

    Settings are read once from the environment and the .env file; the
    nested groups are exposed separately so services depend on only the
    slice they use.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation lifecycle settings."""
        return settings.invitations

    @provide(scope=Scope.APP)
    def provide_pagination_settings(self, settings: Settings) -> PaginationSettings:
        """Provide pagination settings."""
        return settings.pagination
