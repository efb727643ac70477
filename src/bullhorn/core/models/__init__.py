"""Pydantic models for events, filters, notifications, live events and config."""
from bullhorn.core.models.config import BullhornConfig
from bullhorn.core.models.event import Event, EventKind, Tag
from bullhorn.core.models.filter import Filter
from bullhorn.core.models.live_event import (
    LiveEventHost,
    LiveEventImage,
    LiveEventParticipant,
    LiveEventRecord,
)
from bullhorn.core.models.notification import Notification, Priority

__all__ = [
    "BullhornConfig",
    "Event",
    "EventKind",
    "Tag",
    "Filter",
    "LiveEventHost",
    "LiveEventImage",
    "LiveEventParticipant",
    "LiveEventRecord",
    "Notification",
    "Priority",
]
