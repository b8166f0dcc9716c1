"""Mock identity providers for testing."""

from dishka import Scope, provide

from invitely.adapter.google import MockGoogleIdentityProvider
from invitely.domain.service import IdentityProvider
from invitely.util.di.infrastructure.identity import IdentityProviderBase


class MockIdentityProvider(IdentityProviderBase):
    """Mock identity provider accepting ``valid:<email>`` tokens."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_identity_provider(self) -> IdentityProvider:
        """Provide mock Google identity provider."""
        return MockGoogleIdentityProvider()
