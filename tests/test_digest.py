"""Digest aggregation: support filtering, idempotence and delivery marking."""

from __future__ import annotations

import anyio

from civicmail.application.use_cases import publish_announcement, run_digest, run_digest_async
from civicmail.application.use_cases.digests import DigestOutcome, EmailDigest
from civicmail.infrastructure.mail import Mailer
from civicmail.infrastructure.mail.templates import MANAGE_EMAIL_SUBSCRIPTIONS
from civicmail.infrastructure.repositories import AnnouncementRepository, NotificationRepository
from civicmail.utils import now_in_app_timezone


class _FailingTransport:
    def send(self, delivery):
        return None


def _announce(session, subject, title: str, recipients):
    return publish_announcement(
        session,
        subject_type=subject.kind,
        subject_id=subject.id,
        author_id=subject.author_id,
        title=title,
        body=f"{title} body",
        recipient_ids=[recipient.id for recipient in recipients],
    )


def _pending(session, user):
    session.expire_all()
    return NotificationRepository(session).list_pending_for_user(user.id)


def test_digest_only_includes_supported_subjects(
    session, session_factory, mailer, outbox, links, make_user, make_proposal, support
) -> None:
    user = make_user("Gloria")
    p1 = make_proposal(make_user("Quique"), title="Green roofs")
    p2 = make_proposal(make_user("Sonia"), title="Night buses")
    p3 = make_proposal(make_user("Tomas"), title="Dog park")
    support(user, p1)
    support(user, p2)
    roof = _announce(session, p1, "Roof update", [user])
    bus = _announce(session, p2, "Bus update", [user])
    _announce(session, p3, "Park update", [user])

    summary = run_digest(session_factory, mailer, links=links, app_name="Consul")

    assert summary.sent == 1
    [email] = outbox.emails_for(user.email)
    assert email.subject == "Proposal notifications in Consul"
    assert email.has_body_text("Green roofs")
    assert email.has_body_text("Night buses")
    assert not email.has_body_text("Dog park")
    assert email.has_body_text("Roof update body")
    assert email.has_body_text("Bus update")
    assert not email.has_body_text("Park update")
    assert email.has_body_text("Quique")
    assert email.has_body_text("Sonia")
    assert not email.has_body_text("Tomas")
    for published in (roof, bus):
        assert email.has_body_text(f"/notifications/{published.notifications[0].id}")
    assert email.has_body_text(f"/proposals/{p1.id}#comments")
    assert email.has_body_text(f"/proposals/{p2.id}#social-share")
    assert email.body.count(MANAGE_EMAIL_SUBSCRIPTIONS) == 1
    assert email.body.count("/account") == 1

    [left] = _pending(session, user)
    assert left.subject_id == p3.id


def test_digest_groups_entries_by_subject(
    session, session_factory, mailer, outbox, links, make_user, make_proposal, support
) -> None:
    user = make_user()
    proposal = make_proposal(title="Community garden")
    support(user, proposal)
    first = _announce(session, proposal, "Seeds arrived", [user])
    second = _announce(session, proposal, "Watering schedule", [user])

    run_digest(session_factory, mailer, links=links, app_name="Consul")

    email = outbox.last_email()
    assert email.body.count("<section>") == 1
    assert email.body.index("Seeds arrived") < email.body.index("Watering schedule")
    for published in (first, second):
        entry = published.notifications[0]
        assert email.has_body_text(f"/notifications/{entry.id}")


def test_digest_is_idempotent(
    session, session_factory, mailer, outbox, links, make_user, make_proposal, support
) -> None:
    user = make_user()
    proposal = make_proposal()
    support(user, proposal)
    published = _announce(session, proposal, "Budget approved", [user])

    first = run_digest(session_factory, mailer, links=links, app_name="Consul")
    second = run_digest(session_factory, mailer, links=links, app_name="Consul")

    assert first.sent == 1
    assert second.sent == 0
    assert len(outbox.emails_for(user.email)) == 1
    session.expire_all()
    entry = NotificationRepository(session).get(published.notifications[0].id)
    assert entry.emailed_at is not None


def test_user_without_supported_entries_gets_no_email(
    session, session_factory, mailer, outbox, links, make_user, make_proposal
) -> None:
    user = make_user()
    proposal = make_proposal()
    _announce(session, proposal, "Unsupported news", [user])

    summary = run_digest(session_factory, mailer, links=links, app_name="Consul")

    assert summary.sent == 0
    assert summary.skipped == 1
    assert outbox.emails == []
    assert len(_pending(session, user)) == 1


def test_digest_respects_opt_out(
    session, session_factory, mailer, outbox, links, make_user, make_proposal, support
) -> None:
    user = make_user(email_digest=False)
    proposal = make_proposal()
    support(user, proposal)
    _announce(session, proposal, "Quiet update", [user])

    run_digest(session_factory, mailer, links=links, app_name="Consul")

    assert outbox.emails == []
    assert len(_pending(session, user)) == 1


def test_failed_send_leaves_entries_pending(
    session, session_factory, outbox, links, make_user, make_proposal, support
) -> None:
    user = make_user()
    proposal = make_proposal()
    support(user, proposal)
    _announce(session, proposal, "Retry me", [user])

    failed = run_digest(
        session_factory, Mailer(_FailingTransport()), links=links, app_name="Consul"
    )

    assert failed.failed == 1
    assert len(_pending(session, user)) == 1

    retried = run_digest(session_factory, Mailer(outbox), links=links, app_name="Consul")

    assert retried.sent == 1
    assert outbox.last_email().has_body_text("Retry me")
    assert _pending(session, user) == []


def test_concurrent_claim_aborts_the_digest(
    session, session_factory, mailer, outbox, links, make_user, make_proposal, support
) -> None:
    user = make_user()
    proposal = make_proposal()
    support(user, proposal)
    first = _announce(session, proposal, "First", [user])
    _announce(session, proposal, "Second", [user])
    stolen_id = first.notifications[0].id

    class RacingDigest(EmailDigest):
        def collect(self, recipient):
            items = super().collect(recipient)
            other = session_factory()
            try:
                NotificationRepository(other).claim_pending(
                    [stolen_id], user_id=recipient.id, emailed_at=now_in_app_timezone()
                )
                other.commit()
            finally:
                other.close()
            return items

    worker = session_factory()
    try:
        outcome = RacingDigest(worker, mailer, links=links, app_name="Consul").deliver(user.id)
    finally:
        worker.close()

    assert outcome is DigestOutcome.CONFLICT
    assert outbox.emails == []
    [left] = _pending(session, user)
    assert left.id != stolen_id


def test_orphan_entries_are_skipped(
    session, session_factory, mailer, outbox, links, make_user, make_proposal, support
) -> None:
    user = make_user()
    proposal = make_proposal()
    support(user, proposal)
    orphan = _announce(session, proposal, "Withdrawn", [user])
    _announce(session, proposal, "Still here", [user])
    AnnouncementRepository(session).delete(orphan.announcement.id)

    summary = run_digest(session_factory, mailer, links=links, app_name="Consul")

    assert summary.sent == 1
    email = outbox.last_email()
    assert email.has_body_text("Still here")
    assert not email.has_body_text("Withdrawn")
    [left] = _pending(session, user)
    assert left.id == orphan.notifications[0].id


def test_each_recipient_gets_a_single_email(
    session, session_factory, mailer, outbox, links, make_user, make_proposal, support
) -> None:
    proposal = make_proposal()
    supporters = [make_user() for _ in range(3)]
    for supporter in supporters:
        support(supporter, proposal)
    publish_announcement(
        session,
        subject_type=proposal.kind,
        subject_id=proposal.id,
        author_id=proposal.author_id,
        title="Open meeting",
        body="Join us on Monday",
    )

    summary = anyio.run(
        lambda: run_digest_async(
            session_factory, mailer, max_workers=1, links=links, app_name="Consul"
        )
    )

    assert summary.sent == 3
    for supporter in supporters:
        assert len(outbox.emails_for(supporter.email)) == 1


def test_one_failing_recipient_does_not_stop_the_run(
    session, session_factory, outbox, links, make_user, make_proposal, support
) -> None:
    proposal = make_proposal()
    supporters = [make_user() for _ in range(3)]
    for supporter in supporters:
        support(supporter, proposal)
    _announce(session, proposal, "Street party", supporters)
    unlucky = supporters[0]

    class FlakyTransport:
        def send(self, delivery):
            if delivery.recipient == unlucky.email:
                raise ConnectionError("SMTP relay unavailable")
            return outbox.send(delivery)

    summary = run_digest(
        session_factory, Mailer(FlakyTransport()), links=links, app_name="Consul"
    )

    assert summary.failed == 1
    assert summary.sent == 2
    assert outbox.emails_for(unlucky.email) == []
    assert len(_pending(session, unlucky)) == 1
    for supporter in supporters[1:]:
        assert len(outbox.emails_for(supporter.email)) == 1
        assert _pending(session, supporter) == []


def test_parallel_run_sends_every_digest(
    session, session_factory, mailer, outbox, links, make_user, make_proposal, support
) -> None:
    proposal = make_proposal()
    supporters = [make_user() for _ in range(8)]
    for supporter in supporters:
        support(supporter, proposal)
    _announce(session, proposal, "Final vote", supporters)

    summary = anyio.run(
        lambda: run_digest_async(
            session_factory, mailer, max_workers=4, links=links, app_name="Consul"
        )
    )

    assert summary.sent == 8
    assert summary.failed == 0
    for supporter in supporters:
        assert len(outbox.emails_for(supporter.email)) == 1
        assert _pending(session, supporter) == []


def test_overlapping_runs_email_each_recipient_once(
    session, session_factory, mailer, outbox, links, make_user, make_proposal, support
) -> None:
    proposal = make_proposal()
    supporters = [make_user() for _ in range(6)]
    for supporter in supporters:
        support(supporter, proposal)
    _announce(session, proposal, "Results published", supporters)
    summaries = []

    async def _run() -> None:
        summaries.append(
            await run_digest_async(
                session_factory, mailer, max_workers=2, links=links, app_name="Consul"
            )
        )

    async def _overlap() -> None:
        async with anyio.create_task_group() as task_group:
            task_group.start_soon(_run)
            task_group.start_soon(_run)

    anyio.run(_overlap)

    assert sum(summary.sent for summary in summaries) == len(supporters)
    assert sum(summary.failed for summary in summaries) == 0
    for supporter in supporters:
        assert len(outbox.emails_for(supporter.email)) == 1
