from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

import resend

from birthday_mailer.models import ComposedMessage, EventKind
from birthday_mailer.settings import DEFAULT_SENDER, Settings

LOGGER = logging.getLogger(__name__)


class Mailer(Protocol):
    async def send_email(self, params: dict[str, Any]) -> Any: ...


@dataclass(frozen=True)
class DeliveryConfig:
    api_key: str | None
    recipients: tuple[str, ...]
    sender: str = DEFAULT_SENDER
    dry_run_if_no_api_key: bool = False
    pause_seconds: float = 2.0

    @classmethod
    def from_settings(cls, settings: Settings) -> DeliveryConfig:
        return cls(
            api_key=settings.resend_api_key,
            recipients=parse_recipients(settings.notification_email),
            sender=settings.sender_address,
            dry_run_if_no_api_key=settings.dry_run_if_no_api_key,
            pause_seconds=settings.send_pause_seconds,
        )


def parse_recipients(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(address.strip() for address in raw.split(",") if address.strip())


class ResendMailer:
    """Thin async wrapper around the synchronous Resend SDK."""

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key

    async def send_email(self, params: dict[str, Any]) -> Any:
        return await asyncio.to_thread(self._send, params)

    def _send(self, params: dict[str, Any]) -> Any:
        # The SDK reads its key from module state; set it right before each call.
        resend.api_key = self._api_key
        return resend.Emails.send(params)


class NotificationDispatcher:
    def __init__(self, config: DeliveryConfig, mailer: Mailer | None = None) -> None:
        self._config = config
        if mailer is None and config.api_key:
            mailer = ResendMailer(config.api_key)
        self._mailer = mailer

    @property
    def config(self) -> DeliveryConfig:
        return self._config

    async def dispatch(
        self,
        name: str,
        message: ComposedMessage,
        kind: EventKind | None = None,
    ) -> bool:
        """Send one composed message to every configured recipient.

        Returns True only when the provider accepted the message. Delivery
        problems are logged and never raised.
        """
        label = kind.value if kind is not None else "notification"
        config = self._config

        if not config.api_key or self._mailer is None:
            if config.dry_run_if_no_api_key:
                LOGGER.info(
                    "DRY-RUN: would send %r for %s [%s] to %s",
                    message.subject,
                    name,
                    label,
                    ", ".join(config.recipients) or "<no recipients>",
                )
            else:
                LOGGER.error("Missing RESEND_API_KEY, not sending email for %s", name)
            return False

        if not config.recipients:
            LOGGER.error("Missing NOTIFICATION_EMAIL, not sending email for %s", name)
            return False

        params = {
            "from": config.sender,
            "to": list(config.recipients),
            "subject": message.subject,
            "html": message.html,
        }
        try:
            response = await self._mailer.send_email(params)
        except Exception:
            LOGGER.exception("Failed to send email for %s [%s]", name, label)
            return False

        LOGGER.info("Resend response: %s", response)
        LOGGER.info("Email sent for %s [%s]", name, label)
        if config.pause_seconds > 0:
            await asyncio.sleep(config.pause_seconds)
        return True
