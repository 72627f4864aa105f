"""Integration tests for the HTTP API."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

from civicmail.infrastructure.database import get_db
from civicmail.interfaces.api.dependencies import (
    get_link_builder,
    get_mailer,
    get_session_factory,
)


@pytest.fixture()
def client(session_factory, mailer, links):
    """Return a test client wired to the per-test database and outbox."""

    from main import create_app

    app = create_app()

    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_mailer] = lambda: mailer
    app.dependency_overrides[get_link_builder] = lambda: links
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    with TestClient(app) as test_client:
        yield test_client


def _as(user) -> dict[str, str]:
    return {"X-User-Id": str(user.id)}


def test_signup_sends_confirmation(client, outbox) -> None:
    response = client.post(
        "/users",
        json={"name": "Pablo", "email": "pablo@example.com", "preferences": {"email_on_comment": True}},
    )

    assert response.status_code == 201
    payload = response.json()
    assert payload["preferences"]["email_on_comment"] is True
    assert payload["confirmed_at"] is None
    assert outbox.last_email().subject == "Confirmation instructions"

    duplicate = client.post("/users", json={"name": "Pablo", "email": "pablo@example.com"})
    assert duplicate.status_code == 400


def test_confirmation_endpoint(client, session, mailer, links) -> None:
    from civicmail.application.use_cases import register_user

    user = register_user(session, mailer, name="Rosa", email="rosa@example.com", links=links)

    response = client.get(
        "/users/confirmation", params={"confirmation_token": user.confirmation_token}
    )

    assert response.status_code == 200
    assert response.json()["confirmed_at"] is not None
    assert client.get("/users/confirmation", params={"confirmation_token": "nope"}).status_code == 404


def test_password_reset_does_not_reveal_accounts(client, outbox, make_user) -> None:
    user = make_user()

    known = client.post("/users/password", json={"email": user.email})
    unknown = client.post("/users/password", json={"email": "someone@example.com"})

    assert known.status_code == unknown.status_code == 202
    assert known.json() == unknown.json()
    assert len(outbox.emails) == 1


def test_post_comment_requires_a_user(client, make_proposal) -> None:
    proposal = make_proposal()
    payload = {"commentable_type": "proposal", "commentable_id": proposal.id, "body": "Hi"}

    assert client.post("/comments", json=payload).status_code == 401
    assert client.post("/comments", json=payload, headers={"X-User-Id": "999"}).status_code == 404


def test_post_comment_notifies_author(client, outbox, make_user, make_proposal) -> None:
    author = make_user(email_on_comment=True)
    commenter = make_user()
    proposal = make_proposal(author)

    response = client.post(
        "/comments",
        json={"commentable_type": "proposal", "commentable_id": proposal.id, "body": "Love it"},
        headers=_as(commenter),
    )

    assert response.status_code == 201
    assert response.json()["notification"] == "sent"
    assert outbox.last_email().recipient == author.email


def test_post_comment_on_missing_subject(client, make_user) -> None:
    response = client.post(
        "/comments",
        json={"commentable_type": "debate", "commentable_id": 77, "body": "Hello?"},
        headers=_as(make_user()),
    )

    assert response.status_code == 404


def test_direct_message_endpoint(client, outbox, make_user) -> None:
    sender = make_user()
    receiver = make_user()

    response = client.post(
        "/direct-messages",
        json={"receiver_id": receiver.id, "title": "Hello", "body": "How are you?"},
        headers=_as(sender),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["receiver_notification"] == "sent"
    assert body["sender_notification"] == "sent"
    assert len(outbox.emails) == 2


def test_announcement_then_digest(client, outbox, make_user, make_proposal, support) -> None:
    author = make_user()
    supporter = make_user()
    proposal = make_proposal(author, title="Recycling points")
    support(supporter, proposal)

    announced = client.post(
        "/announcements",
        json={
            "subject_type": "proposal",
            "subject_id": proposal.id,
            "title": "New containers",
            "body": "Installed this week",
        },
        headers=_as(author),
    )
    assert announced.status_code == 201
    assert announced.json()["queued_for"] == 1

    pending = client.get("/notifications", params={"pending": True}, headers=_as(supporter))
    assert pending.status_code == 200
    assert len(pending.json()) == 1

    run = client.post("/digests/run", json={"max_workers": 1})
    assert run.status_code == 200
    assert run.json()["sent"] == 1
    assert outbox.last_email().has_body_text("New containers")

    after = client.get("/notifications", params={"pending": True}, headers=_as(supporter))
    assert after.json() == []
    history = client.get("/notifications", headers=_as(supporter)).json()
    assert history[0]["emailed_at"] is not None


def test_valuation_endpoint(client, outbox, make_user, make_spending_proposal) -> None:
    valuator = make_user()
    project = make_spending_proposal()

    response = client.put(
        f"/spending-proposals/{project.id}/valuation",
        json={
            "feasible": False,
            "feasible_explanation": "Over budget",
            "valuation_finished": True,
        },
        headers=_as(valuator),
    )

    assert response.status_code == 200
    assert response.json()["unfeasible_email_sent_at"] is not None
    assert outbox.last_email().has_body_text("Over budget")

    missing = client.put(
        "/spending-proposals/999/valuation",
        json={"feasible": True},
        headers=_as(valuator),
    )
    assert missing.status_code == 404


def test_digest_run_can_expire_stale_entries(
    client, session, outbox, make_user, make_proposal
) -> None:
    from datetime import timedelta

    from civicmail.domain.entities import Notification
    from civicmail.infrastructure.repositories import NotificationRepository
    from civicmail.utils import now_in_app_timezone

    user = make_user()
    proposal = make_proposal()
    ledger = NotificationRepository(session)
    stale = ledger.record(
        Notification(
            id=None,
            recipient_id=user.id,
            notifiable_type="proposal_notification",
            notifiable_id=1,
            subject_type="proposal",
            subject_id=proposal.id,
            created_at=now_in_app_timezone() - timedelta(days=365),
        )
    )

    run = client.post("/digests/run", json={"max_workers": 1, "expire_stale": True})

    assert run.status_code == 200
    assert run.json()["expired"] == 1
    assert run.json()["sent"] == 0
    assert outbox.emails == []
    session.expire_all()
    assert ledger.get(stale.id).expired_at is not None
