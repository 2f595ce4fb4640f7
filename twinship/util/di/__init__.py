"""Dependency injection wiring."""

from collections.abc import Collection

from twinship.util.di.application import ProdApplicationProvider
from twinship.util.di.base import Component, ProviderBase
from twinship.util.di.core import ProdConfigProvider
from twinship.util.di.domain import ProdDomainProvider
from twinship.util.di.infrastructure import (
    ClockProvider,
    NotificationProvider,
    PersistenceProvider,
    ProdClockProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
    ProdTransportProvider,
    TransportProvider,
)

PROVIDERS: tuple[type[ProviderBase], ...] = (
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    ClockProvider,
    NotificationProvider,
    PersistenceProvider,
    TransportProvider,
)

SWAPPABLE_COMPONENTS: frozenset[Component] = frozenset(
    base.__mock_component__ for base in PROVIDERS if base.__mock_component__
)


def get_provider(
    base: type[ProviderBase], use_mock: bool = False
) -> type[ProviderBase]:
    """Pick the implementation registered under ``base``.

    Core providers have no subclasses and come back unchanged. Component
    bases choose between their subclasses by ``__is_mock__``; the mock
    subclasses only exist once ``tests.di`` has been imported.

    Raises:
        ValueError: If the requested implementation was never defined
    """
    implementations = {impl.__is_mock__: impl for impl in base.__subclasses__()}
    if not implementations:
        return base

    impl = implementations.get(use_mock)
    if impl is None:
        kind = "mock" if use_mock else "production"
        raise ValueError(
            f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
        )
    return impl


def build_providers(mocked: Collection[Component] = ()) -> list[ProviderBase]:
    """Instantiate one provider per entry in PROVIDERS.

    Args:
        mocked: Components to wire with their mock implementation

    Returns:
        Provider instances ready for ``make_async_container``
    """
    return [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "SWAPPABLE_COMPONENTS",
    "build_providers",
    "get_provider",
    "ClockProvider",
    "NotificationProvider",
    "PersistenceProvider",
    "TransportProvider",
    "ProdApplicationProvider",
    "ProdClockProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
    "ProdTransportProvider",
]
