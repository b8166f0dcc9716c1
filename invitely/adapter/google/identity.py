"""Google ID token verification.

Tokens are checked through Google's tokeninfo endpoint, which validates the
signature and expiry; the audience and email verification are checked here.
"""

import httpx
import logfire

from invitely.adapter.error import ProviderError
from invitely.domain.service.identity import ExternalIdentity, IdentityProvider


class GoogleIdentityProvider(IdentityProvider):
    """Base class for Google identity providers.

    Provides type distinction for dependency injection.
    """

    pass


class RealGoogleIdentityProvider(GoogleIdentityProvider):
    """Verifies Google ID tokens against the tokeninfo endpoint."""

    def __init__(self, client_id: str, tokeninfo_url: str) -> None:
        """Initialize Google identity provider.

        Args:
            client_id: OAuth client ID the token audience must match
            tokeninfo_url: Google tokeninfo endpoint
        """
        self.client_id = client_id
        self.tokeninfo_url = tokeninfo_url

    async def verify_id_token(self, id_token: str) -> ExternalIdentity:
        """Verify a Google ID token.

        Args:
            id_token: ID token from Google Sign-In

        Returns:
            Verified identity

        Raises:
            ProviderError: If the token is rejected or Google is unreachable
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    self.tokeninfo_url,
                    params={"id_token": id_token},
                    timeout=10.0,
                )
        except httpx.HTTPError as e:
            logfire.error("Google tokeninfo HTTP error", error=str(e))
            raise ProviderError(f"HTTP error verifying Google token: {e}")

        if response.status_code != 200:
            logfire.warn(
                "Google token rejected",
                status_code=response.status_code,
                error=response.text,
            )
            raise ProviderError(f"Google rejected the token: {response.status_code}")

        claims = response.json()

        if claims.get("aud") != self.client_id:
            logfire.warn("Google token audience mismatch", aud=claims.get("aud"))
            raise ProviderError("Google token was issued for another client")

        # tokeninfo returns booleans as strings
        email_verified = str(claims.get("email_verified", "")).lower() == "true"
        if not claims.get("email") or not email_verified:
            raise ProviderError("Google account email is not verified")

        logfire.info("Google token verified", email=claims["email"])

        return ExternalIdentity(
            subject=claims["sub"],
            email=claims["email"],
            name=claims.get("name"),
            avatar_url=claims.get("picture"),
            email_verified=True,
        )


class MockGoogleIdentityProvider(GoogleIdentityProvider):
    """Mock Google identity provider for testing.

    Accepts tokens of the form ``valid:<email>[:<name>]`` and rejects
    everything else, without network calls.
    """

    async def verify_id_token(self, id_token: str) -> ExternalIdentity:
        """Return an identity decoded from a mock token.

        Raises:
            ProviderError: If the token is not a mock token
        """
        kind, _, rest = id_token.partition(":")
        if kind != "valid" or not rest:
            raise ProviderError("Invalid mock Google token")

        email, _, name = rest.partition(":")
        return ExternalIdentity(
            subject=f"mock-{email}",
            email=email,
            name=name or "Mock Google User",
            avatar_url="https://example.com/avatar.jpg",
            email_verified=True,
        )
