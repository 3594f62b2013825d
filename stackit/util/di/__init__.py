"""Dependency injection.

`PROVIDERS` lists one entry per component. Plain providers are used as they
are. A provider with subclasses is a swappable component: the subclass with
``__is_mock__ = False`` backs the running API, the one with
``__is_mock__ = True`` (under tests/di) backs the test suite.
"""

from stackit.util.di.adapter import ProdAdapterProvider
from stackit.util.di.application import ProdApplicationProvider
from stackit.util.di.base import Component, ProviderBase
from stackit.util.di.core import ProdConfigProvider
from stackit.util.di.domain import ProdDomainProvider
from stackit.util.di.infrastructure import NotificationProvider, PersistenceProvider

PROVIDERS: list[type[ProviderBase]] = [
    ProdConfigProvider,
    ProdAdapterProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    NotificationProvider,
    PersistenceProvider,
]


def get_provider(base: type[ProviderBase], use_mock: bool = False) -> type[ProviderBase]:
    """Resolve a `PROVIDERS` entry to the class to instantiate.

    Raises:
        ValueError: A swappable component has no implementation of the
            requested kind (typically tests/di was not imported)
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {base.__mock_component__}")


__all__ = ["Component", "ProviderBase", "PROVIDERS", "get_provider"]
