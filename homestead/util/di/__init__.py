"""Dependency injection module.

Infrastructure components (``persistence``, ``email``) have a production
provider and may have a mock provider registered as a further subclass of
the component's base provider. Tests register their mocks by importing
``tests.di``.
"""

from collections.abc import Collection
from typing import Type

from homestead.util.di.application import ProdApplicationProvider
from homestead.util.di.base import Component, ProviderBase
from homestead.util.di.core import ProdConfigProvider
from homestead.util.di.domain import ProdDomainProvider
from homestead.util.di.infrastructure import (
    EmailProvider,
    PersistenceProvider,
    ProdEmailProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
    EmailProvider,
]

COMPONENTS: frozenset[Component] = frozenset(
    base.__mock_component__ for base in PROVIDERS if base.__mock_component__
)


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of a provider.

    Providers without subclasses are used as they are. A component base is
    resolved to the subclass whose ``__is_mock__`` matches ``use_mock``.

    Raises:
        ValueError: If the component has no such implementation
    """
    subclasses = base.__subclasses__()
    if not subclasses:
        return base

    for impl in subclasses:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {base.__mock_component__}")


def select_providers(mocked: Collection[Component] = ()) -> list[ProviderBase]:
    """Instantiate every provider, using mocks for the given components.

    Raises:
        ValueError: If a component name is unknown or has no mock
    """
    unknown = set(mocked) - COMPONENTS
    if unknown:
        raise ValueError(f"Unknown components: {sorted(unknown)}")

    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "COMPONENTS",
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "select_providers",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "EmailProvider",
    "PersistenceProvider",
    "ProdEmailProvider",
    "ProdPersistenceProvider",
]
