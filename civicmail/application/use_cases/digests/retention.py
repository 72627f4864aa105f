"""Bounded retention for ledger entries that never make it into a digest."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from civicmail.config import get_settings
from civicmail.infrastructure.repositories import NotificationRepository
from civicmail.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def expire_stale_notifications(
    session: Session,
    *,
    retention_days: int | None = None,
    now: datetime | None = None,
) -> int:
    """Expire pending entries older than the retention window.

    Typical leftovers are announcements about subjects the recipient never
    supported and entries whose announcement was deleted. Expired entries
    stay in the ledger but are ignored by every digest run.
    """

    days = (
        retention_days
        if retention_days is not None
        else get_settings().notification_retention_days
    )
    if days <= 0:
        raise ValueError("retention_days must be positive")

    current = now or now_in_app_timezone()
    expired = NotificationRepository(session).expire_pending_before(
        current - timedelta(days=days), expired_at=current
    )
    if expired:
        logger.info("Expired %s pending notifications older than %s days", expired, days)
    return expired


__all__ = ["expire_stale_notifications"]
