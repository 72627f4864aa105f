"""In-memory transport that keeps every email it is given.

Used as the mail backend in development and as the capture sink in tests:
it answers "what was the last email" and "which emails has this address not
opened yet".
"""

from __future__ import annotations

import threading

from .delivery import MailDelivery, SentEmail
from .templates import render_template


class NoEmailSentError(LookupError):
    """Raised when an email is expected but none was sent since the reset."""

    def __init__(self, message: str = "No email has been sent!") -> None:
        super().__init__(message)


class MemoryOutbox:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._emails: list[SentEmail] = []
        self._opened: set[int] = set()

    def send(self, delivery: MailDelivery) -> SentEmail | None:
        sent = SentEmail(
            recipient=delivery.recipient,
            subject=delivery.subject,
            body=render_template(delivery.template, delivery.variables),
            template=delivery.template,
            variables=dict(delivery.variables),
        )
        self.record(sent)
        return sent

    def record(self, email: SentEmail) -> None:
        """Store ``email``; usable as a :class:`Mailer` listener."""

        with self._lock:
            self._emails.append(email)

    @property
    def emails(self) -> list[SentEmail]:
        with self._lock:
            return list(self._emails)

    def reset(self) -> None:
        with self._lock:
            self._emails.clear()
            self._opened.clear()

    def last_email(self) -> SentEmail:
        with self._lock:
            if not self._emails:
                raise NoEmailSentError()
            return self._emails[-1]

    def open_last_email(self) -> SentEmail:
        """Return the most recent email and mark it as read."""

        with self._lock:
            if not self._emails:
                raise NoEmailSentError()
            self._opened.add(len(self._emails) - 1)
            return self._emails[-1]

    def emails_for(self, address: str) -> list[SentEmail]:
        wanted = address.strip().lower()
        with self._lock:
            return [email for email in self._emails if email.recipient.lower() == wanted]

    def unread_emails_for(self, address: str) -> list[SentEmail]:
        wanted = address.strip().lower()
        with self._lock:
            return [
                email
                for index, email in enumerate(self._emails)
                if email.recipient.lower() == wanted and index not in self._opened
            ]


__all__ = ["MemoryOutbox", "NoEmailSentError"]
