"""ntfy subscription topic: persisted UUID plus a terminal QR code."""

from __future__ import annotations

import io
import logging
import uuid
from pathlib import Path

import qrcode

_log = logging.getLogger(__name__)

_TOPIC_FILE_NAME = "topic"


def get_subscription_topic(directory: Path) -> str:
    """Return the persisted topic in *directory*, creating one if absent.

    Raises:
        ValueError: If the topic file exists but does not hold a UUID.
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / _TOPIC_FILE_NAME
    if path.is_file():
        contents = path.read_text(encoding="utf-8").strip()
        return str(uuid.UUID(contents))

    topic = str(uuid.uuid4())
    path.write_text(topic, encoding="utf-8")
    _log.info("Created new subscription topic in %s", path)
    return topic


def render_qr(data: str) -> str:
    """Render *data* as a QR code made of text characters."""
    code = qrcode.QRCode(border=1)
    code.add_data(data)
    code.make(fit=True)
    out = io.StringIO()
    code.print_ascii(out=out)
    return out.getvalue()


def display_subscription_qr(topic: str) -> None:
    print("This is your subscription topic. Messages will be sent to this topic in ntfy.")
    print()
    print(render_qr(topic))
    print(topic)
    print()
    print("Load this into the ntfy app to receive push notifications.")
