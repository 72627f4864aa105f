"""Publish announcements and record them in the notification ledger."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from civicmail.domain.entities import Announcement, Notification
from civicmail.domain.notifiables import AnnouncementNotifiable, Notifiable
from civicmail.infrastructure.repositories import (
    AnnouncementRepository,
    CommentableRepository,
    NotificationRepository,
    UserRepository,
    VoteRepository,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PublishedAnnouncement:
    announcement: Announcement
    notifications: Sequence[Notification]


def record_notification(
    session: Session, *, recipient_id: int, notifiable: Notifiable
) -> Notification | None:
    """Add a pending ledger entry telling ``recipient_id`` about ``notifiable``.

    Authors are never notified about their own notifiables; ``None`` is
    returned in that case.
    """

    if notifiable.author_id is not None and notifiable.author_id == recipient_id:
        return None

    subject = notifiable.subject
    return NotificationRepository(session).record(
        Notification(
            id=None,
            recipient_id=recipient_id,
            notifiable_type=notifiable.kind,
            notifiable_id=notifiable.id,
            subject_type=subject.kind if subject else None,
            subject_id=subject.id if subject else None,
        )
    )


def publish_announcement(
    session: Session,
    *,
    subject_type: str,
    subject_id: int,
    author_id: int | None,
    title: str,
    body: str,
    recipient_ids: Iterable[int] | None = None,
) -> PublishedAnnouncement:
    """Store an announcement and queue it for the recipients' next digest.

    Without explicit ``recipient_ids`` the audience is every supporter of
    the subject.
    """

    subject = CommentableRepository(session).get(subject_type, subject_id)
    if subject is None:
        msg = f"{subject_type.capitalize()} with id {subject_id} not found"
        raise ValueError(msg)

    users = UserRepository(session)
    author = users.get(author_id) if author_id is not None else None
    if author_id is not None and author is None:
        msg = f"User with id {author_id} not found"
        raise ValueError(msg)

    if recipient_ids is None:
        recipient_ids = VoteRepository(session).list_voter_ids(subject.kind, subject.id)
    recipients = list(dict.fromkeys(recipient_ids))

    announcement = AnnouncementRepository(session).create(
        Announcement(
            id=None,
            subject_type=subject.kind,
            subject_id=subject.id,
            author_id=author_id,
            title=title,
            body=body,
        )
    )
    notifiable = AnnouncementNotifiable.build(announcement, author=author, subject=subject)

    known = users.get_map_by_ids(recipients)
    notifications: list[Notification] = []
    for recipient_id in recipients:
        if recipient_id not in known:
            logger.warning(
                "Skipping unknown recipient %s for announcement %s",
                recipient_id,
                announcement.id,
            )
            continue
        entry = record_notification(session, recipient_id=recipient_id, notifiable=notifiable)
        if entry is not None:
            notifications.append(entry)

    logger.info(
        "Announcement %s on %s %s queued for %s recipients",
        announcement.id,
        subject.kind,
        subject.id,
        len(notifications),
    )
    return PublishedAnnouncement(announcement=announcement, notifications=notifications)


__all__ = ["PublishedAnnouncement", "publish_announcement", "record_notification"]
