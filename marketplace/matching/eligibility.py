from __future__ import annotations

from collections.abc import Iterable

from .models import City, Provider, ProviderStatus, ServiceType


def is_eligible(provider: Provider, service_type: ServiceType, city: City) -> bool:
    """Approved, offers the service, and operates in the city."""
    return (
        provider.status == ProviderStatus.approved
        and service_type in provider.services
        and city in provider.cities
    )


def filter_eligible(
    service_type: ServiceType,
    city: City,
    providers: Iterable[Provider],
) -> list[Provider]:
    """Return the providers that qualify for the request, in input order.

    Pending and suspended providers are always excluded. Duplicates are
    kept as given; an empty result is a valid answer, not an error.
    """
    return [p for p in providers if is_eligible(p, service_type, city)]
