"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from invitely.adapter.google import RealGoogleIdentityProvider
from invitely.config import PLACEHOLDER_SECRET, Settings
from invitely.domain.service import IdentityProvider
from invitely.util.di.base import ProviderBase


class IdentityProviderBase(ProviderBase):
    """Identity component base."""

    __mock_component__ = "identity"


class ProdIdentityProvider(IdentityProviderBase):
    """Production identity provider verifying Google ID tokens."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_provider(self, settings: Settings) -> IdentityProvider:
        """Provide Google identity provider.

        Raises:
            ValueError: If the Google client ID is not configured in production
        """
        google = settings.auth.google
        unset = google.client_id == PLACEHOLDER_SECRET
        if settings.environment == "production" and unset:
            raise ValueError("Google OAuth client ID must be configured")

        return RealGoogleIdentityProvider(
            client_id=google.client_id,
            tokeninfo_url=google.tokeninfo_url,
        )
