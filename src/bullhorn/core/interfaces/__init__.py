"""Collaborator interfaces (ABCs) and transport notification items."""

from bullhorn.core.interfaces.transport import (
    EventLookup,
    Lagged,
    Notifier,
    RelayEvent,
    RelayNotification,
    Shutdown,
    SubscriptionSource,
)

__all__ = [
    "EventLookup",
    "Lagged",
    "Notifier",
    "RelayEvent",
    "RelayNotification",
    "Shutdown",
    "SubscriptionSource",
]
