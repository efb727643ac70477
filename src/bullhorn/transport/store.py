"""In-memory event store used as the local lookup table for seen events."""

from __future__ import annotations

from bullhorn.core.interfaces.transport import EventLookup
from bullhorn.core.models.event import Event


class InMemoryEventStore(EventLookup):
    """Dict-backed :class:`EventLookup`.

    Sources call :meth:`save` for every event they deliver, so notes we
    authored become available for reply validation.
    """

    def __init__(self) -> None:
        self._events: dict[str, Event] = {}

    def save(self, event: Event) -> bool:
        """Store *event*.  Returns ``False`` if it was already known."""
        if event.id in self._events:
            return False
        self._events[event.id] = event
        return True

    async def get_event(self, event_id: str) -> Event | None:
        return self._events.get(event_id)
