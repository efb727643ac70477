"""Interfaces (ABCs) for the collaborators the notification core depends on.

The relay transport, the local event store and the push channel all live
outside the core.  Each has an abstract base class here; the in-memory and
JSON-lines implementations under :mod:`bullhorn.transport`, and the ntfy
client under :mod:`bullhorn.notify`, implement them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import AsyncIterator, Union

from bullhorn.core.models.event import Event
from bullhorn.core.models.filter import Filter
from bullhorn.core.models.notification import Notification


# ---------------------------------------------------------------------------
# Transport notification items
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RelayEvent:
    """An accepted, validated event received from a relay."""

    event: Event
    relay_url: str = ""


@dataclass(frozen=True)
class Lagged:
    """The consumer fell behind and *skipped* notifications were dropped."""

    skipped: int


@dataclass(frozen=True)
class Shutdown:
    """The transport is shutting down on request."""


RelayNotification = Union[RelayEvent, Lagged, Shutdown]


# ---------------------------------------------------------------------------
# Subscription source
# ---------------------------------------------------------------------------

class SubscriptionSource(ABC):
    """Continuous, ordered stream of relay notifications.

    The stream ends (``StopAsyncIteration``) when the transport closes for
    good.  Reconnection and retries are the implementation's concern.
    """

    @abstractmethod
    def notifications(self) -> AsyncIterator[RelayNotification]:
        """Return the notification stream.  Call before :meth:`subscribe`."""

    @abstractmethod
    async def subscribe(self, filters: list[Filter]) -> None:
        """Start delivering events that match any of *filters*."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Stop intake; the stream yields :class:`Shutdown` and then ends."""


# ---------------------------------------------------------------------------
# Event lookup
# ---------------------------------------------------------------------------

class EventLookup(ABC):
    """Local store of previously seen events."""

    @abstractmethod
    async def get_event(self, event_id: str) -> Event | None:
        """Return the stored event, or ``None`` if it is unknown."""


# ---------------------------------------------------------------------------
# Notifier
# ---------------------------------------------------------------------------

class Notifier(ABC):
    """Best-effort push delivery."""

    @abstractmethod
    async def send(self, notification: Notification) -> None:
        """Deliver *notification*.

        Raises:
            NotificationDeliveryError: If delivery failed.
        """
