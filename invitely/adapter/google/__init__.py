"""Google identity adapter."""

from .identity import (
    GoogleIdentityProvider,
    MockGoogleIdentityProvider,
    RealGoogleIdentityProvider,
)

__all__ = [
    "GoogleIdentityProvider",
    "MockGoogleIdentityProvider",
    "RealGoogleIdentityProvider",
]
