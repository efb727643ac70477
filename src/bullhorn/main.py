"""Bullhorn — application entry point (composition root).

Wires together: Config → topic → event store + source → ntfy notifier →
NotificationService.  Raw events are read as JSON lines from stdin, so a
relay client can be piped in, e.g.::

    nak req --stream -k 4 -k 1 -k 9735 -k 30311 wss://relay.damus.io | bullhorn
"""

from __future__ import annotations

import asyncio
import logging
import sys

from bullhorn.config.config_manager import config_dir, load_config
from bullhorn.config.topic import display_subscription_qr, get_subscription_topic
from bullhorn.core.models.config import BullhornConfig
from bullhorn.core.service import NotificationService
from bullhorn.log_config.logger import setup_logging
from bullhorn.notify.ntfy import NtfyNotifier
from bullhorn.transport.jsonl_source import JsonLinesSubscriptionSource
from bullhorn.transport.store import InMemoryEventStore

_log = logging.getLogger(__name__)


async def run(config: BullhornConfig, topic: str) -> None:
    """Run the pipeline until stdin closes or the task is cancelled."""
    store = InMemoryEventStore()
    source = JsonLinesSubscriptionSource(sys.stdin, store=store)
    notifier = NtfyNotifier(topic, server=config.ntfy_server)

    service = NotificationService(config, source, store, notifier)
    await service.start()
    try:
        await service.wait()
    except asyncio.CancelledError:
        _log.info("Shutdown signal received. Shutting down.")
        await service.shutdown()
        raise
    finally:
        notifier.close()


def main() -> None:
    """Synchronous entry point."""
    config = load_config()
    setup_logging(config.log_level, config.log_dir)
    _log.info("Bullhorn process starting up.")
    _log.debug("config: %r", config)

    topic = get_subscription_topic(config_dir())
    display_subscription_qr(topic)

    try:
        asyncio.run(run(config, topic))
    except KeyboardInterrupt:
        pass
    _log.info("Successfully shut down.")


if __name__ == "__main__":
    main()
