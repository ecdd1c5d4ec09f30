from __future__ import annotations

import logging
from enum import Enum

from ..analytics.store import record_event
from .cache import clear_cache
from .data_store import get_provider, replace_provider
from .models import Provider, ProviderApplication, ProviderStatus

logger = logging.getLogger(__name__)


class MarketplaceError(Exception):
    """Base class for errors raised outside the matching engine."""


class ProviderNotFoundError(MarketplaceError):
    def __init__(self, provider_id: str) -> None:
        super().__init__(f"Provider {provider_id!r} not found")
        self.provider_id = provider_id


class InvalidTransitionError(MarketplaceError):
    def __init__(self, provider_id: str, action: str, status: ProviderStatus) -> None:
        super().__init__(f"Cannot {action} provider {provider_id!r} while {status.value}")
        self.provider_id = provider_id
        self.action = action
        self.status = status


class DuplicateProviderError(MarketplaceError):
    def __init__(self, provider_id: str) -> None:
        super().__init__(f"Provider {provider_id!r} already exists")
        self.provider_id = provider_id


class LifecycleAction(str, Enum):
    approve = "approve"
    suspend = "suspend"
    reactivate = "reactivate"


# action -> (required current status, resulting status)
TRANSITIONS: dict[LifecycleAction, tuple[ProviderStatus, ProviderStatus]] = {
    LifecycleAction.approve: (ProviderStatus.pending, ProviderStatus.approved),
    LifecycleAction.suspend: (ProviderStatus.approved, ProviderStatus.suspended),
    LifecycleAction.reactivate: (ProviderStatus.suspended, ProviderStatus.approved),
}


def transition_provider(provider_id: str, action: LifecycleAction) -> Provider:
    """Apply an admin status change and return the updated record.

    The stored record is replaced rather than mutated, and cached match
    results are dropped so the new status takes effect immediately.
    """
    provider = get_provider(provider_id)
    if provider is None:
        raise ProviderNotFoundError(provider_id)

    required, target = TRANSITIONS[action]
    if provider.status != required:
        raise InvalidTransitionError(provider_id, action.value, provider.status)

    updated = provider.model_copy(update={"status": target})
    replace_provider(updated)
    clear_cache()
    record_event("transition", {
        "provider_id": provider_id,
        "action": action.value,
        "from_status": provider.status.value,
        "to_status": target.value,
    })
    logger.info(
        "Provider %s %s: %s -> %s",
        provider_id, action.value, provider.status.value, target.value,
    )
    return updated


def register_provider(application: ProviderApplication) -> Provider:
    """Add a self-registered provider. It stays out of matching until approved."""
    if get_provider(application.id) is not None:
        raise DuplicateProviderError(application.id)

    provider = Provider(**application.model_dump(), status=ProviderStatus.pending)
    replace_provider(provider)
    clear_cache()
    record_event("registration", {"provider_id": provider.id})
    logger.info("Provider %s registered, awaiting approval", provider.id)
    return provider
