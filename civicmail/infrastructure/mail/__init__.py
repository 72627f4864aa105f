"""Outgoing email: delivery records, transports and the shared mailer."""

from __future__ import annotations

from functools import lru_cache

from civicmail.config import Settings, get_settings

from .delivery import Mailer, MailDelivery, SentEmail, SentEmailListener, Transport
from .outbox import MemoryOutbox, NoEmailSentError
from .sendgrid_transport import SendGridTransport
from .templates import render_template


def build_transport(settings: Settings) -> Transport:
    if settings.mail_backend == "memory":
        return MemoryOutbox()
    return SendGridTransport(settings.sendgrid_api_key, settings.sendgrid_sender)


@lru_cache
def get_mailer() -> Mailer:
    """Return the process-wide mailer built from the current settings."""

    return Mailer(build_transport(get_settings()))


__all__ = [
    "Mailer",
    "MailDelivery",
    "MemoryOutbox",
    "NoEmailSentError",
    "SendGridTransport",
    "SentEmail",
    "SentEmailListener",
    "Transport",
    "build_transport",
    "get_mailer",
    "render_template",
]
