"""Load the notifiables referenced by ledger entries."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from civicmail.domain.entities import Notification
from civicmail.domain.notifiables import (
    NOTIFIABLE_DEBATE_ANNOUNCEMENT,
    NOTIFIABLE_PROPOSAL_ANNOUNCEMENT,
    AnnouncementNotifiable,
    Notifiable,
)
from civicmail.infrastructure.repositories import (
    AnnouncementRepository,
    CommentableRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

_ANNOUNCEMENT_KINDS = {NOTIFIABLE_PROPOSAL_ANNOUNCEMENT, NOTIFIABLE_DEBATE_ANNOUNCEMENT}


class NotifiableResolver:
    """Batch-load notifiables for ledger entries, skipping orphans."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def resolve(self, entries: Sequence[Notification]) -> dict[int, Notifiable]:
        """Return notifiables keyed by ledger entry id.

        Entries whose notifiable or subject no longer exists, or whose type
        cannot appear in a digest, are logged and left out.
        """

        announcement_ids = [
            entry.notifiable_id for entry in entries if entry.notifiable_type in _ANNOUNCEMENT_KINDS
        ]
        announcements = AnnouncementRepository(self.session).get_map_by_ids(announcement_ids)
        subjects = CommentableRepository(self.session).get_map(
            {
                (announcement.subject_type, announcement.subject_id)
                for announcement in announcements.values()
            }
        )
        authors = UserRepository(self.session).get_map_by_ids(
            [announcement.author_id for announcement in announcements.values()]
        )

        resolved: dict[int, Notifiable] = {}
        for entry in entries:
            if entry.notifiable_type not in _ANNOUNCEMENT_KINDS:
                logger.warning(
                    "Ledger entry %s has unsupported notifiable type '%s'",
                    entry.id,
                    entry.notifiable_type,
                )
                continue
            announcement = announcements.get(entry.notifiable_id)
            subject = (
                subjects.get((announcement.subject_type, announcement.subject_id))
                if announcement
                else None
            )
            if announcement is None or subject is None:
                logger.warning(
                    "Ledger entry %s points to missing %s %s; leaving it pending",
                    entry.id,
                    entry.notifiable_type,
                    entry.notifiable_id,
                )
                continue
            resolved[entry.id] = AnnouncementNotifiable.build(
                announcement,
                author=authors.get(announcement.author_id),
                subject=subject,
            )
        return resolved


__all__ = ["NotifiableResolver"]
