"""Dependency injection module."""

from typing import Type

from invitely.util.di.application import ProdApplicationProvider
from invitely.util.di.base import Component, ProviderBase
from invitely.util.di.core import ProdConfigProvider
from invitely.util.di.domain import ProdDomainProvider
from invitely.util.di.infrastructure import (
    IdentityProviderBase,
    PersistenceProvider,
    ProdIdentityProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    # Concrete
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Mockable components
    IdentityProviderBase,
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve the provider class to instantiate for ``base``.

    A base without subclasses is concrete and used as-is. Otherwise the
    subclass whose ``__is_mock__`` matches ``use_mock`` is picked.

    Raises:
        ValueError: If requested implementation not found
    """
    subclasses = base.__subclasses__()
    if not subclasses:
        return base

    impl = next(
        (c for c in subclasses if getattr(c, "__is_mock__", False) == use_mock),
        None,
    )
    if not impl:
        kind = "mock" if use_mock else "production"
        component_name = getattr(base, "__mock_component__", base.__name__)
        raise ValueError(f"No {kind} implementation for {component_name}")

    return impl


__all__ = [
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "get_provider",
    "IdentityProviderBase",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdIdentityProvider",
    "ProdPersistenceProvider",
]
