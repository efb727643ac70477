"""Event store and subscription sources (in-memory and JSON lines)."""

from bullhorn.transport.jsonl_source import JsonLinesSubscriptionSource, parse_line
from bullhorn.transport.queue_source import QueueSubscriptionSource
from bullhorn.transport.store import InMemoryEventStore

__all__ = [
    "InMemoryEventStore",
    "JsonLinesSubscriptionSource",
    "QueueSubscriptionSource",
    "parse_line",
]
