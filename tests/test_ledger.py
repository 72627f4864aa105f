"""Ledger recording, dedupe and retention."""

from __future__ import annotations

from datetime import timedelta

import pytest

from civicmail.application.use_cases import expire_stale_notifications, publish_announcement
from civicmail.application.use_cases.notifications import record_notification
from civicmail.domain.entities import Notification
from civicmail.domain.notifiables import AnnouncementNotifiable
from civicmail.infrastructure.repositories import NotificationRepository, UserRepository
from civicmail.utils import now_in_app_timezone


def test_default_audience_is_every_supporter(
    session, make_user, make_proposal, support
) -> None:
    author = make_user()
    proposal = make_proposal(author)
    supporters = [make_user(), make_user()]
    for supporter in supporters:
        support(supporter, proposal)
    support(author, proposal)
    bystander = make_user()

    published = publish_announcement(
        session,
        subject_type="proposal",
        subject_id=proposal.id,
        author_id=author.id,
        title="We reached the threshold",
        body="Thanks for your support",
    )

    recipients = {entry.recipient_id for entry in published.notifications}
    assert recipients == {supporter.id for supporter in supporters}
    assert author.id not in recipients
    assert bystander.id not in recipients
    entry = published.notifications[0]
    assert entry.notifiable_type == "proposal_notification"
    assert (entry.subject_type, entry.subject_id) == ("proposal", proposal.id)


def test_debate_announcements_use_their_own_type(session, make_user, make_debate) -> None:
    reader = make_user()
    debate = make_debate()

    published = publish_announcement(
        session,
        subject_type="debate",
        subject_id=debate.id,
        author_id=debate.author_id,
        title="Summary",
        body="Conclusions so far",
        recipient_ids=[reader.id],
    )

    assert published.notifications[0].notifiable_type == "debate_notification"


def test_recording_twice_bumps_the_counter(session, make_user, make_proposal) -> None:
    user = make_user()
    proposal = make_proposal()
    published = publish_announcement(
        session,
        subject_type="proposal",
        subject_id=proposal.id,
        author_id=proposal.author_id,
        title="Reminder",
        body="Vote closes soon",
        recipient_ids=[user.id],
    )
    notifiable = AnnouncementNotifiable.build(
        published.announcement,
        author=UserRepository(session).get(proposal.author_id),
        subject=proposal,
    )

    again = record_notification(session, recipient_id=user.id, notifiable=notifiable)

    assert again.id == published.notifications[0].id
    assert again.counter == 2
    assert len(NotificationRepository(session).list_for_user(user.id)) == 1


def test_unknown_recipients_are_skipped(session, make_user, make_proposal) -> None:
    user = make_user()
    proposal = make_proposal()

    published = publish_announcement(
        session,
        subject_type="proposal",
        subject_id=proposal.id,
        author_id=proposal.author_id,
        title="Hello",
        body="World",
        recipient_ids=[user.id, 9999, user.id],
    )

    assert [entry.recipient_id for entry in published.notifications] == [user.id]


def test_unknown_subject_is_rejected(session) -> None:
    with pytest.raises(ValueError, match="not found"):
        publish_announcement(
            session,
            subject_type="proposal",
            subject_id=42,
            author_id=None,
            title="Ghost",
            body="Nothing here",
        )


def test_stale_pending_entries_expire(session, make_user, make_proposal) -> None:
    user = make_user()
    proposal = make_proposal()
    ledger = NotificationRepository(session)
    now = now_in_app_timezone()
    stale = ledger.record(
        Notification(
            id=None,
            recipient_id=user.id,
            notifiable_type="proposal_notification",
            notifiable_id=1,
            subject_type="proposal",
            subject_id=proposal.id,
            created_at=now - timedelta(days=120),
        )
    )
    fresh = ledger.record(
        Notification(
            id=None,
            recipient_id=user.id,
            notifiable_type="proposal_notification",
            notifiable_id=2,
            subject_type="proposal",
            subject_id=proposal.id,
            created_at=now - timedelta(days=5),
        )
    )

    expired = expire_stale_notifications(session, retention_days=90, now=now)

    assert expired == 1
    session.expire_all()
    assert ledger.get(stale.id).expired_at is not None
    assert ledger.get(stale.id).is_pending is False
    assert [entry.id for entry in ledger.list_pending_for_user(user.id)] == [fresh.id]
    assert len(ledger.list_for_user(user.id)) == 2


@pytest.mark.parametrize("retention_days", [0, -1])
def test_retention_must_be_positive(session, retention_days: int) -> None:
    with pytest.raises(ValueError, match="positive"):
        expire_stale_notifications(session, retention_days=retention_days)
