"""Domain entity representing a platform user."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class NotificationPreferences:
    """Snapshot of the email subscription flags chosen by a user."""

    email_on_comment: bool = False
    email_on_comment_reply: bool = False
    email_digest: bool = True


@dataclass
class User:
    """Core attributes describing a user for notification purposes."""

    id: int | None
    name: str
    email: str
    locale: str = "en"
    preferences: NotificationPreferences = field(default_factory=NotificationPreferences)
    confirmation_token: str | None = None
    confirmed_at: datetime | None = None
    reset_password_token: str | None = None
    reset_password_sent_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def is_confirmed(self) -> bool:
        return self.confirmed_at is not None


__all__ = ["NotificationPreferences", "User"]
