"""JSON-lines subscription source reading raw events from a text stream.

Each line is either a bare event object or a relay ``["EVENT", <sub>, {…}]``
message, as printed by common nostr command-line clients.  Reading happens
in a daemon thread; lines are handed to the event loop with
``loop.call_soon_threadsafe``.  End of stream closes the subscription.
"""

from __future__ import annotations

import asyncio
import json
import logging
import threading
from typing import Any, Callable, TextIO

from bullhorn.core.models.event import Event
from bullhorn.core.models.filter import Filter
from bullhorn.transport.queue_source import QueueSubscriptionSource
from bullhorn.transport.store import InMemoryEventStore

_log = logging.getLogger(__name__)


def parse_line(line: str) -> Event | None:
    """Parse one input line into an event, or ``None`` if it holds none."""
    line = line.strip()
    if not line:
        return None
    try:
        data = json.loads(line)
    except json.JSONDecodeError:
        _log.warning("Ignoring non-JSON input line: %.60s", line)
        return None

    if isinstance(data, list):
        if len(data) >= 3 and data[0] == "EVENT" and isinstance(data[2], dict):
            data = data[2]
        else:
            return None
    if not isinstance(data, dict):
        return None
    try:
        return Event.model_validate(data)
    except ValueError as exc:
        _log.warning("Ignoring malformed event: %s", exc)
        return None


class JsonLinesSubscriptionSource(QueueSubscriptionSource):
    """Subscription source fed from *stream* (typically ``sys.stdin``).

    Args:
        stream: Text stream to read, one JSON value per line.
        source_name: Reported as the relay URL of every event.
        store: Store that receives every delivered event.
    """

    def __init__(
        self,
        stream: TextIO,
        source_name: str = "stdin",
        store: InMemoryEventStore | None = None,
    ) -> None:
        super().__init__(store=store)
        self._stream = stream
        self._source_name = source_name
        self._reader: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    async def subscribe(self, filters: list[Filter]) -> None:
        await super().subscribe(filters)
        if self._reader is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._reader = threading.Thread(
            target=self._read_lines, name=f"jsonl-{self._source_name}", daemon=True
        )
        self._reader.start()

    def _read_lines(self) -> None:
        """Thread target: forward each line to the event loop until EOF."""
        assert self._loop is not None
        try:
            for line in self._stream:
                self._call_in_loop(self._ingest, line)
        except (OSError, ValueError):
            _log.exception("Reading %s failed", self._source_name)
        _log.info("End of input on %s", self._source_name)
        self._call_in_loop(self.close)

    def _call_in_loop(self, func: Callable[..., Any], *args: Any) -> None:
        assert self._loop is not None
        try:
            self._loop.call_soon_threadsafe(func, *args)
        except RuntimeError:
            # Loop already closed during process exit.
            pass

    def _ingest(self, line: str) -> None:
        event = parse_line(line)
        if event is not None:
            self.push(event, self._source_name)
