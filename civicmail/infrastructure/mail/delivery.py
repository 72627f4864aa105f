"""Transport boundary for outgoing email.

The application composes a :class:`MailDelivery` (recipient, subject,
template identifier and variables) and hands it to a :class:`Mailer`.
Transports render and deliver it; every successful delivery is reported to
the mailer's listeners as a :class:`SentEmail` so collaborators can observe
what went out without depending on a specific transport.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from civicmail.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailDelivery:
    recipient: str
    subject: str
    template: str
    variables: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SentEmail:
    """Observable record of an email accepted by a transport."""

    recipient: str
    subject: str
    body: str
    template: str
    variables: Mapping[str, Any]
    sent_at: datetime = field(default_factory=now_in_app_timezone)

    def has_body_text(self, text: str) -> bool:
        return text in self.body


class Transport(Protocol):
    def send(self, delivery: MailDelivery) -> SentEmail | None:
        """Deliver ``delivery``; return ``None`` when it could not be sent."""


SentEmailListener = Callable[[SentEmail], None]


class Mailer:
    """Send deliveries through a transport and notify listeners on success."""

    def __init__(
        self,
        transport: Transport,
        *,
        listeners: tuple[SentEmailListener, ...] = (),
    ) -> None:
        self.transport = transport
        self._listeners: list[SentEmailListener] = list(listeners)

    def add_listener(self, listener: SentEmailListener) -> None:
        self._listeners.append(listener)

    def deliver(self, delivery: MailDelivery) -> SentEmail | None:
        try:
            sent = self.transport.send(delivery)
        except Exception:  # pragma: no cover - transports report failures themselves
            logger.exception(
                "Transport raised while sending '%s' to %s",
                delivery.template,
                delivery.recipient,
            )
            return None

        if sent is None:
            logger.error(
                "Email '%s' to %s was not delivered", delivery.template, delivery.recipient
            )
            return None

        for listener in self._listeners:
            listener(sent)
        return sent


__all__ = ["Mailer", "MailDelivery", "SentEmail", "SentEmailListener", "Transport"]
