"""
hostwatch Notification Module.
Delivers alert text to WhatsApp through the Infobip HTTP API, or to the
terminal in dry-run mode.
"""

import logging
from typing import Protocol

import requests

from hostwatch.config import NotifierSettings
from hostwatch.errors import NotifierFailure

logger = logging.getLogger(__name__)

WHATSAPP_TEXT_PATH = "/whatsapp/1/message/text"


class Notifier(Protocol):
    """Delivery transport for alert text."""

    def send(self, destination: str, sender: str, text: str) -> int | str:
        """Deliver text; return a transport status or raise NotifierFailure."""
        ...


class WhatsAppNotifier:
    """Sends WhatsApp text messages via Infobip."""

    def __init__(self, settings: NotifierSettings, session: requests.Session | None = None):
        self.settings = settings
        self.session = session or requests.Session()
        base = settings.base_url.rstrip("/")
        if not base.startswith(("http://", "https://")):
            base = f"https://{base}"
        self.url = f"{base}{WHATSAPP_TEXT_PATH}"

    def send(self, destination: str, sender: str, text: str) -> int:
        """
        POST one text message.

        Returns:
            HTTP status code of the accepted request

        Raises:
            NotifierFailure: on connection errors, timeouts or non-2xx responses
        """
        payload = {"from": sender, "to": destination, "content": {"text": text}}
        headers = {
            "Authorization": f"App {self.settings.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        try:
            response = self.session.post(
                self.url,
                json=payload,
                headers=headers,
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as e:
            raise NotifierFailure(f"WhatsApp request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise NotifierFailure(
                f"WhatsApp API returned HTTP {response.status_code}: {response.text[:200]}",
                status=response.status_code,
            )

        logger.debug(f"WhatsApp message to {destination} accepted: HTTP {response.status_code}")
        return response.status_code

    def close(self) -> None:
        self.session.close()


class ConsoleNotifier:
    """Prints alerts instead of sending them."""

    def send(self, destination: str, sender: str, text: str) -> str:
        # Imported here so the core stays usable without a terminal.
        from hostwatch.ui import console

        target = destination or "console"
        console.alert(f"{text} [secondary](-> {target})[/]")
        return "printed"

    def close(self) -> None:
        pass


def build_notifier(settings: NotifierSettings, dry_run: bool = False):
    """Pick the delivery transport for the given settings."""
    if dry_run:
        return ConsoleNotifier()
    return WhatsAppNotifier(settings)
