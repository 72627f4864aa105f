"""Shared fixtures: a throwaway SQLite database, a capturing mailer and factories."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="civicmail-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_ROOT / 'app.db'}"
os.environ["MAIL_BACKEND"] = "memory"
os.environ["BASE_URL"] = ""
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

import pytest
from sqlalchemy.orm import sessionmaker

from civicmail.domain.entities import (
    Comment,
    Debate,
    NotificationPreferences,
    Proposal,
    SpendingProposal,
    User,
    Vote,
)
from civicmail.infrastructure.database import build_engine, initialize_database
from civicmail.infrastructure.links import LinkBuilder
from civicmail.infrastructure.mail import Mailer, MemoryOutbox
from civicmail.infrastructure.repositories import (
    CommentableRepository,
    CommentRepository,
    SpendingProposalRepository,
    UserRepository,
    VoteRepository,
)


@pytest.fixture()
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    initialize_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def outbox() -> MemoryOutbox:
    return MemoryOutbox()


@pytest.fixture()
def mailer(outbox: MemoryOutbox) -> Mailer:
    return Mailer(outbox)


@pytest.fixture()
def links() -> LinkBuilder:
    return LinkBuilder("")


@pytest.fixture()
def make_user(session):
    counter = {"value": 0}

    def _make_user(name: str | None = None, **preferences) -> User:
        counter["value"] += 1
        name = name or f"User {counter['value']}"
        return UserRepository(session).create(
            User(
                id=None,
                name=name,
                email=f"user{counter['value']}@example.com",
                preferences=NotificationPreferences(**preferences),
            )
        )

    return _make_user


@pytest.fixture()
def make_proposal(session, make_user):
    def _make_proposal(author: User | None = None, title: str = "More bike lanes") -> Proposal:
        author = author or make_user()
        return CommentableRepository(session).create(
            Proposal(id=None, title=title, author_id=author.id)
        )

    return _make_proposal


@pytest.fixture()
def make_debate(session, make_user):
    def _make_debate(
        author: User | None = None, title: str = "Open the library on Sundays"
    ) -> Debate:
        author = author or make_user()
        return CommentableRepository(session).create(
            Debate(id=None, title=title, author_id=author.id)
        )

    return _make_debate


@pytest.fixture()
def make_comment(session):
    def _make_comment(subject, author: User, body: str = "I agree", parent: Comment | None = None):
        return CommentRepository(session).create(
            Comment(
                id=None,
                commentable_type=subject.kind,
                commentable_id=subject.id,
                author_id=author.id,
                body=body,
                parent_id=parent.id if parent else None,
            )
        )

    return _make_comment


@pytest.fixture()
def support(session):
    def _support(user: User, subject) -> Vote:
        return VoteRepository(session).create(
            Vote(id=None, voter_id=user.id, votable_type=subject.kind, votable_id=subject.id)
        )

    return _support


@pytest.fixture()
def make_spending_proposal(session, make_user):
    def _make_spending_proposal(author: User | None = None, **fields) -> SpendingProposal:
        author = author or make_user()
        fields.setdefault("title", "Solar panels for schools")
        return SpendingProposalRepository(session).create(
            SpendingProposal(id=None, author_id=author.id, **fields)
        )

    return _make_spending_proposal
