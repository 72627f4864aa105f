"""Domain entity for a notification ledger entry."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Notification:
    """Records that ``recipient_id`` should learn about a notifiable.

    ``emailed_at`` stays empty while the entry is pending and is set once,
    when the entry is included in a digest. ``expired_at`` marks pending
    entries that outlived the retention window and will never be mailed.
    """

    id: int | None
    recipient_id: int
    notifiable_type: str
    notifiable_id: int
    subject_type: str | None
    subject_id: int | None
    counter: int = 1
    created_at: datetime | None = None
    emailed_at: datetime | None = None
    expired_at: datetime | None = None

    @property
    def is_pending(self) -> bool:
        return self.emailed_at is None and self.expired_at is None


__all__ = ["Notification"]
