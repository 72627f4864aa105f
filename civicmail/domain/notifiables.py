"""Uniform read-only views over the events that can trigger an email.

Each variant pins down who authored the event, what to show (title and
body), where the email should link to (``target``) and which proposal or
debate the event belongs to (``subject``, used for support filtering).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .entities import (
    COMMENTABLE_DEBATE,
    Announcement,
    Comment,
    Commentable,
    DirectMessage,
    User,
)

LINK_COMMENT = "comment"
LINK_USER = "user"

NOTIFIABLE_COMMENT = "comment"
NOTIFIABLE_REPLY = "reply"
NOTIFIABLE_PROPOSAL_ANNOUNCEMENT = "proposal_notification"
NOTIFIABLE_DEBATE_ANNOUNCEMENT = "debate_notification"
NOTIFIABLE_DIRECT_MESSAGE = "direct_message"


@dataclass(frozen=True)
class EntityRef:
    """Reference to a linkable entity, resolved to a URL by the link builder."""

    kind: str
    id: int


@dataclass(frozen=True)
class Notifiable:
    id: int
    author: User | None
    title: str | None
    body: str
    target: EntityRef
    subject: Commentable | None

    kind: ClassVar[str] = ""

    @property
    def author_id(self) -> int | None:
        return self.author.id if self.author else None


@dataclass(frozen=True)
class CommentNotifiable(Notifiable):
    """A new top-level comment; links to the commented subject."""

    kind: ClassVar[str] = NOTIFIABLE_COMMENT

    @classmethod
    def build(
        cls, comment: Comment, *, author: User | None, subject: Commentable
    ) -> "CommentNotifiable":
        return cls(
            id=comment.id,
            author=author,
            title=subject.title,
            body=comment.body,
            target=EntityRef(subject.kind, subject.id),
            subject=subject,
        )


@dataclass(frozen=True)
class ReplyNotifiable(Notifiable):
    """A reply to ``parent``; links to the reply itself, not the thread root."""

    parent: Comment

    kind: ClassVar[str] = NOTIFIABLE_REPLY

    @classmethod
    def build(
        cls,
        reply: Comment,
        *,
        author: User | None,
        parent: Comment,
        subject: Commentable,
    ) -> "ReplyNotifiable":
        return cls(
            id=reply.id,
            author=author,
            title=subject.title,
            body=reply.body,
            target=EntityRef(LINK_COMMENT, reply.id),
            subject=subject,
            parent=parent,
        )


@dataclass(frozen=True)
class AnnouncementNotifiable(Notifiable):
    """Administrative update published on a proposal or debate."""

    @staticmethod
    def build(
        announcement: Announcement,
        *,
        author: User | None,
        subject: Commentable,
    ) -> "AnnouncementNotifiable":
        variant = (
            DebateAnnouncement if subject.kind == COMMENTABLE_DEBATE else ProposalAnnouncement
        )
        return variant(
            id=announcement.id,
            author=author,
            title=announcement.title,
            body=announcement.body,
            target=EntityRef(subject.kind, subject.id),
            subject=subject,
        )


@dataclass(frozen=True)
class ProposalAnnouncement(AnnouncementNotifiable):
    kind: ClassVar[str] = NOTIFIABLE_PROPOSAL_ANNOUNCEMENT


@dataclass(frozen=True)
class DebateAnnouncement(AnnouncementNotifiable):
    kind: ClassVar[str] = NOTIFIABLE_DEBATE_ANNOUNCEMENT


@dataclass(frozen=True)
class DirectMessageNotifiable(Notifiable):
    """Private message; links to the sender's public profile."""

    receiver: User

    kind: ClassVar[str] = NOTIFIABLE_DIRECT_MESSAGE

    @classmethod
    def build(
        cls, message: DirectMessage, *, sender: User, receiver: User
    ) -> "DirectMessageNotifiable":
        return cls(
            id=message.id,
            author=sender,
            title=message.title,
            body=message.body,
            target=EntityRef(LINK_USER, sender.id),
            subject=None,
            receiver=receiver,
        )


__all__ = [
    "AnnouncementNotifiable",
    "CommentNotifiable",
    "DebateAnnouncement",
    "DirectMessageNotifiable",
    "EntityRef",
    "LINK_COMMENT",
    "LINK_USER",
    "NOTIFIABLE_COMMENT",
    "NOTIFIABLE_DEBATE_ANNOUNCEMENT",
    "NOTIFIABLE_DIRECT_MESSAGE",
    "NOTIFIABLE_PROPOSAL_ANNOUNCEMENT",
    "NOTIFIABLE_REPLY",
    "Notifiable",
    "ProposalAnnouncement",
    "ReplyNotifiable",
]
