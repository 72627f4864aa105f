"""Immediate emails for new comments and replies."""

from __future__ import annotations

import pytest

from civicmail.application.use_cases import post_comment
from civicmail.application.use_cases.notifications import DispatchOutcome
from civicmail.infrastructure.mail import Mailer, NoEmailSentError
from civicmail.infrastructure.mail.templates import MANAGE_EMAIL_SUBSCRIPTIONS
from civicmail.infrastructure.repositories import CommentRepository


class _FailingTransport:
    def send(self, delivery):
        return None


def test_comment_on_proposal_emails_its_author(
    session, mailer, outbox, links, make_user, make_proposal
) -> None:
    author = make_user("Ana", email_on_comment=True)
    commenter = make_user("Bruno")
    proposal = make_proposal(author)

    posted = post_comment(
        session,
        mailer,
        author_id=commenter.id,
        commentable_type="proposal",
        commentable_id=proposal.id,
        body="Great idea for the neighbourhood",
        links=links,
    )

    assert posted.notification is DispatchOutcome.SENT
    email = outbox.open_last_email()
    assert email.recipient == author.email
    assert email.subject == "Someone has commented on your citizen proposal"
    assert email.has_body_text("Great idea for the neighbourhood")
    assert email.has_body_text(f"/proposals/{proposal.id}")
    assert not email.has_body_text(MANAGE_EMAIL_SUBSCRIPTIONS)


def test_comment_on_debate_includes_account_link(
    session, mailer, outbox, links, make_user, make_debate
) -> None:
    author = make_user(email_on_comment=True)
    commenter = make_user()
    debate = make_debate(author)

    post_comment(
        session,
        mailer,
        author_id=commenter.id,
        commentable_type="debate",
        commentable_id=debate.id,
        body="Weekends would help students",
        links=links,
    )

    email = outbox.last_email()
    assert email.subject == "Someone has commented on your debate"
    assert email.has_body_text(f"/debates/{debate.id}")
    assert email.has_body_text(MANAGE_EMAIL_SUBSCRIPTIONS)
    assert email.has_body_text("/account")


def test_commenting_on_own_proposal_sends_nothing(
    session, mailer, outbox, links, make_user, make_proposal
) -> None:
    author = make_user(email_on_comment=True)
    proposal = make_proposal(author)

    posted = post_comment(
        session,
        mailer,
        author_id=author.id,
        commentable_type="proposal",
        commentable_id=proposal.id,
        body="Adding some details",
        links=links,
    )

    assert posted.notification is DispatchOutcome.SUPPRESSED
    with pytest.raises(NoEmailSentError):
        outbox.last_email()


def test_author_without_comment_emails_is_not_notified(
    session, mailer, outbox, links, make_user, make_proposal
) -> None:
    author = make_user(email_on_comment=False)
    proposal = make_proposal(author)

    post_comment(
        session,
        mailer,
        author_id=make_user().id,
        commentable_type="proposal",
        commentable_id=proposal.id,
        body="Hello",
        links=links,
    )

    assert outbox.emails == []


def test_reply_emails_the_parent_author_only(
    session, mailer, outbox, links, make_user, make_proposal, make_comment
) -> None:
    proposal_author = make_user(email_on_comment=True)
    parent_author = make_user("Carla", email_on_comment_reply=True)
    replier = make_user("Dario")
    proposal = make_proposal(proposal_author)
    parent = make_comment(proposal, parent_author, body="What about parking?")

    posted = post_comment(
        session,
        mailer,
        author_id=replier.id,
        commentable_type="proposal",
        commentable_id=proposal.id,
        body="Parking stays as it is",
        parent_id=parent.id,
        links=links,
    )

    assert posted.notification is DispatchOutcome.SENT
    assert len(outbox.emails) == 1
    email = outbox.last_email()
    assert email.recipient == parent_author.email
    assert email.subject == "Someone has responded to your comment"
    assert email.has_body_text("Parking stays as it is")
    assert email.has_body_text(f"/comments/{posted.comment.id}")
    assert not email.has_body_text(f"/proposals/{proposal.id}")
    assert email.has_body_text(MANAGE_EMAIL_SUBSCRIPTIONS)
    assert outbox.emails_for(proposal_author.email) == []


def test_replying_to_yourself_sends_nothing(
    session, mailer, outbox, links, make_user, make_proposal, make_comment
) -> None:
    user = make_user(email_on_comment_reply=True)
    proposal = make_proposal()
    parent = make_comment(proposal, user)

    post_comment(
        session,
        mailer,
        author_id=user.id,
        commentable_type="proposal",
        commentable_id=proposal.id,
        body="Answering myself",
        parent_id=parent.id,
        links=links,
    )

    assert outbox.emails == []


def test_reply_respects_disabled_preference(
    session, mailer, outbox, links, make_user, make_debate, make_comment
) -> None:
    parent_author = make_user(email_on_comment_reply=False)
    debate = make_debate()
    parent = make_comment(debate, parent_author)

    posted = post_comment(
        session,
        mailer,
        author_id=make_user().id,
        commentable_type="debate",
        commentable_id=debate.id,
        body="Disagree",
        parent_id=parent.id,
        links=links,
    )

    assert posted.notification is DispatchOutcome.SUPPRESSED
    assert outbox.emails == []


def test_failed_email_keeps_the_comment(session, links, make_user, make_proposal) -> None:
    author = make_user(email_on_comment=True)
    proposal = make_proposal(author)

    posted = post_comment(
        session,
        Mailer(_FailingTransport()),
        author_id=make_user().id,
        commentable_type="proposal",
        commentable_id=proposal.id,
        body="Still stored",
        links=links,
    )

    assert posted.notification is DispatchOutcome.FAILED
    assert CommentRepository(session).get(posted.comment.id) is not None


def test_reply_to_comment_of_another_thread_is_rejected(
    session, mailer, links, make_user, make_proposal, make_comment
) -> None:
    user = make_user()
    parent = make_comment(make_proposal(), user)
    other = make_proposal()

    with pytest.raises(ValueError, match="different thread"):
        post_comment(
            session,
            mailer,
            author_id=user.id,
            commentable_type="proposal",
            commentable_id=other.id,
            body="Lost",
            parent_id=parent.id,
            links=links,
        )


def test_unknown_subject_is_rejected(session, mailer, links, make_user) -> None:
    with pytest.raises(ValueError, match="not found"):
        post_comment(
            session,
            mailer,
            author_id=make_user().id,
            commentable_type="debate",
            commentable_id=999,
            body="Anyone?",
            links=links,
        )
