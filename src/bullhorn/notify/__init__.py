"""Notification payloads and the ntfy push client."""

from bullhorn.notify.messages import (
    comment_notification,
    dm_notification,
    format_duration,
    live_event_notification,
    zap_notification,
)
from bullhorn.notify.ntfy import NtfyNotifier

__all__ = [
    "NtfyNotifier",
    "comment_notification",
    "dm_notification",
    "format_duration",
    "live_event_notification",
    "zap_notification",
]
