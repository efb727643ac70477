"""ntfy.sh notifier — POSTs each notification to ``{server}/{topic}``.

Uses a blocking :class:`requests.Session` run in a worker thread so the
event loop is never held up by a slow push server.
"""

from __future__ import annotations

import asyncio
import logging

import requests

from bullhorn.core.errors import NotificationDeliveryError
from bullhorn.core.interfaces.transport import Notifier
from bullhorn.core.models.notification import Notification
from bullhorn.notify.error_utils import summarize_error

_log = logging.getLogger(__name__)

DEFAULT_SERVER = "https://ntfy.sh"


class NtfyNotifier(Notifier):
    """Push notifications to an ntfy topic.

    Args:
        topic: ntfy topic name (a UUID in practice).
        server: Base URL of the ntfy server.
        timeout: Per-request timeout in seconds.
        session: Optional pre-built session (tests inject a stub).
    """

    def __init__(
        self,
        topic: str,
        server: str = DEFAULT_SERVER,
        timeout: float = 10.0,
        session: requests.Session | None = None,
    ) -> None:
        self._endpoint = f"{server.rstrip('/')}/{topic}"
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def send(self, notification: Notification) -> None:
        await asyncio.to_thread(self.post, notification)

    def post(self, notification: Notification) -> None:
        """Blocking delivery of *notification*.

        Raises:
            NotificationDeliveryError: On network errors or non-2xx replies.
        """
        headers = {
            "X-Title": notification.title,
            "X-Priority": str(int(notification.priority)),
        }
        if notification.tags:
            headers["X-Tags"] = ",".join(notification.tags)
        if notification.click:
            headers["X-Click"] = notification.click

        _log.debug("POST %s (%s)", self._endpoint, notification.title)
        try:
            resp = self._session.post(
                self._endpoint,
                data=notification.message.encode("utf-8"),
                headers=headers,
                timeout=self._timeout,
            )
            resp.raise_for_status()
        except requests.exceptions.RequestException as exc:
            raise NotificationDeliveryError(summarize_error(exc)) from exc

    def close(self) -> None:
        self._session.close()
