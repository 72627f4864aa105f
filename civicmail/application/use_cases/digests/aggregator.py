"""Batch pending ledger entries into one digest email per recipient.

For every user who opted into the digest, pending announcements about the
proposals and debates they support are grouped by subject and sent as a
single email. The included entries are claimed with a compare-and-set update
before sending and the claim is only committed once the transport accepted
the email, so an entry ends up in at most one digest and a failed send
leaves everything pending for the next run. Entries about subjects the user
does not support are left untouched.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

import anyio
import anyio.to_thread
from sqlalchemy.orm import Session

from civicmail.config import get_settings
from civicmail.domain.entities import Notification, User
from civicmail.domain.notifiables import EntityRef, Notifiable
from civicmail.domain.notification_gate import NotificationTopic, should_notify
from civicmail.infrastructure.links import LinkBuilder, get_link_builder
from civicmail.infrastructure.mail import Mailer, MailDelivery
from civicmail.infrastructure.mail.templates import TEMPLATE_DIGEST
from civicmail.infrastructure.repositories import (
    NotificationRepository,
    UserRepository,
    VoteRepository,
)
from civicmail.utils import now_in_app_timezone

from ..notifications import NotifiableResolver

logger = logging.getLogger(__name__)

SUBJECT_DIGEST = "Proposal notifications in {app_name}"

SessionFactory = Callable[[], Session]


class DigestOutcome(str, Enum):
    SENT = "sent"
    EMPTY = "empty"
    FAILED = "failed"
    CONFLICT = "conflict"


@dataclass
class DigestRunSummary:
    sent: int = 0
    skipped: int = 0
    failed: int = 0
    conflicts: int = 0

    def add(self, outcome: DigestOutcome) -> None:
        if outcome is DigestOutcome.SENT:
            self.sent += 1
        elif outcome is DigestOutcome.EMPTY:
            self.skipped += 1
        elif outcome is DigestOutcome.CONFLICT:
            self.conflicts += 1
        else:
            self.failed += 1


@dataclass(frozen=True)
class _DigestItem:
    entry: Notification
    notifiable: Notifiable


class EmailDigest:
    """Compose and deliver the digest of a single recipient."""

    def __init__(
        self,
        session: Session,
        mailer: Mailer,
        *,
        links: LinkBuilder | None = None,
        app_name: str | None = None,
    ) -> None:
        self.session = session
        self.mailer = mailer
        self.links = links or get_link_builder()
        self.app_name = app_name or get_settings().app_name

    def deliver(self, user_id: int) -> DigestOutcome:
        """Claim the recipient's entries, send the email, then commit the claim.

        The claim's write transaction stays open while the transport sends.
        On SQLite that serializes workers behind each send (up to the busy
        timeout), so parallel runs with more than one worker expect a server
        database such as PostgreSQL.
        """

        users = UserRepository(self.session)
        user = users.get(user_id)
        if user is None or not should_notify(
            actor_id=None,
            recipient_id=user.id,
            preferences=user.preferences,
            topic=NotificationTopic.DIGEST,
        ):
            return DigestOutcome.EMPTY

        items = self.collect(user)
        if not items:
            return DigestOutcome.EMPTY

        ledger = NotificationRepository(self.session)
        entry_ids = [item.entry.id for item in items]
        try:
            claimed = ledger.claim_pending(
                entry_ids, user_id=user.id, emailed_at=now_in_app_timezone()
            )
            if claimed != len(entry_ids):
                self.session.rollback()
                logger.warning(
                    "Digest for user %s skipped: %s of %s entries were claimed by another run",
                    user.id,
                    len(entry_ids) - claimed,
                    len(entry_ids),
                )
                return DigestOutcome.CONFLICT

            if self.mailer.deliver(self.compose(user, items)) is None:
                self.session.rollback()
                logger.error(
                    "Digest for user %s could not be sent; %s entries stay pending",
                    user.id,
                    len(entry_ids),
                )
                return DigestOutcome.FAILED

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.debug("Digest sent to user %s with %s entries", user.id, len(entry_ids))
        return DigestOutcome.SENT

    def collect(self, user: User) -> list[_DigestItem]:
        """Return the pending entries that belong in ``user``'s digest."""

        pending = NotificationRepository(self.session).list_pending_for_user(user.id)
        if not pending:
            return []

        notifiables = NotifiableResolver(self.session).resolve(pending)
        supported = VoteRepository(self.session).supported_subjects(
            user.id,
            {
                (entry.subject_type, entry.subject_id)
                for entry in pending
                if entry.subject_type and entry.subject_id is not None
            },
        )
        return [
            _DigestItem(entry=entry, notifiable=notifiables[entry.id])
            for entry in pending
            if entry.id in notifiables
            and (entry.subject_type, entry.subject_id) in supported
        ]

    def compose(self, user: User, items: Sequence[_DigestItem]) -> MailDelivery:
        groups: dict[tuple[str, int], dict[str, Any]] = {}
        subjects = [item.notifiable.subject for item in items]
        authors = UserRepository(self.session).get_map_by_ids(
            [subject.author_id for subject in subjects if subject is not None]
        )

        for item in items:
            subject = item.notifiable.subject
            key = (subject.kind, subject.id)
            group = groups.get(key)
            if group is None:
                subject_ref = EntityRef(subject.kind, subject.id)
                author = authors.get(subject.author_id)
                group = {
                    "subject_title": subject.title,
                    "subject_author_name": author.name if author else "",
                    "comments_url": self.links.link_to(subject_ref, anchor="comments"),
                    "share_url": self.links.link_to(subject_ref, anchor="social-share"),
                    "notifications": [],
                }
                groups[key] = group
            group["notifications"].append(
                {
                    "title": item.notifiable.title,
                    "body": item.notifiable.body,
                    "notification_url": self.links.link_to(
                        EntityRef("notification", item.entry.id)
                    ),
                }
            )

        return MailDelivery(
            recipient=user.email,
            subject=SUBJECT_DIGEST.format(app_name=self.app_name),
            template=TEMPLATE_DIGEST,
            variables={
                "recipient_name": user.name,
                "groups": list(groups.values()),
                "account_url": self.links.account(),
            },
        )


def deliver_user_digest(
    session_factory: SessionFactory,
    mailer: Mailer,
    user_id: int,
    *,
    links: LinkBuilder | None = None,
    app_name: str | None = None,
) -> DigestOutcome:
    """Deliver one recipient's digest in its own session.

    Any error is logged and reported as ``FAILED`` so that the remaining
    recipients of the run are still processed.
    """

    session = session_factory()
    try:
        return EmailDigest(session, mailer, links=links, app_name=app_name).deliver(user_id)
    except Exception:
        logger.exception("Digest for user %s failed", user_id)
        return DigestOutcome.FAILED
    finally:
        session.close()


def _digest_recipient_ids(session_factory: SessionFactory) -> list[int]:
    session = session_factory()
    try:
        return UserRepository(session).list_digest_recipient_ids()
    finally:
        session.close()


def run_digest(
    session_factory: SessionFactory,
    mailer: Mailer,
    *,
    links: LinkBuilder | None = None,
    app_name: str | None = None,
) -> DigestRunSummary:
    """Send every pending digest, one recipient after the other."""

    summary = DigestRunSummary()
    for user_id in _digest_recipient_ids(session_factory):
        summary.add(
            deliver_user_digest(
                session_factory, mailer, user_id, links=links, app_name=app_name
            )
        )
    logger.info("Digest run finished: %s", summary)
    return summary


async def run_digest_async(
    session_factory: SessionFactory,
    mailer: Mailer,
    *,
    max_workers: int | None = None,
    links: LinkBuilder | None = None,
    app_name: str | None = None,
) -> DigestRunSummary:
    """Send every pending digest using up to ``max_workers`` worker threads."""

    limiter = anyio.CapacityLimiter(max_workers or get_settings().digest_max_workers)
    summary = DigestRunSummary()
    recipient_ids = await anyio.to_thread.run_sync(
        _digest_recipient_ids, session_factory, limiter=limiter
    )

    async def _process(user_id: int) -> None:
        outcome = await anyio.to_thread.run_sync(
            functools.partial(
                deliver_user_digest,
                session_factory,
                mailer,
                user_id,
                links=links,
                app_name=app_name,
            ),
            limiter=limiter,
        )
        summary.add(outcome)

    async with anyio.create_task_group() as task_group:
        for user_id in recipient_ids:
            task_group.start_soon(_process, user_id)

    logger.info("Digest run finished: %s", summary)
    return summary


__all__ = [
    "DigestOutcome",
    "DigestRunSummary",
    "EmailDigest",
    "SUBJECT_DIGEST",
    "deliver_user_digest",
    "run_digest",
    "run_digest_async",
]
