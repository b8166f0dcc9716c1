"""End-user identity provider interface."""

from typing import Optional

from invitely.domain.value import ValueObject


class ExternalIdentity(ValueObject):
    """Identity asserted by an external provider."""

    subject: str
    email: str
    name: Optional[str] = None
    avatar_url: Optional[str] = None
    email_verified: bool = False


class IdentityProvider:
    """Verifies identity tokens issued by an external provider."""

    async def verify_id_token(self, id_token: str) -> ExternalIdentity:
        """Verify an ID token and return the identity it asserts.

        Args:
            id_token: Token obtained by the client from the provider

        Returns:
            Verified identity

        Raises:
            ProviderError: If the token is rejected or the provider is unreachable
        """
        raise NotImplementedError
