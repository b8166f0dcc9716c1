"""Infrastructure providers."""

# Import bases
from .identity import IdentityProviderBase
from .persistence import PersistenceProvider

# Import implementations (needed for __subclasses__())
from .identity import ProdIdentityProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401

__all__ = [
    "IdentityProviderBase",
    "PersistenceProvider",
    "ProdIdentityProvider",
    "ProdPersistenceProvider",
]
