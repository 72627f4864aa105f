"""Use cases for posting comments and replies."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from civicmail.domain.entities import Comment
from civicmail.infrastructure.links import LinkBuilder
from civicmail.infrastructure.mail import Mailer
from civicmail.infrastructure.repositories import (
    CommentableRepository,
    CommentRepository,
    UserRepository,
)

from .notifications import DispatchOutcome, notify_comment_created


@dataclass(frozen=True)
class PostedComment:
    comment: Comment
    notification: DispatchOutcome


def post_comment(
    session: Session,
    mailer: Mailer,
    *,
    author_id: int,
    commentable_type: str,
    commentable_id: int,
    body: str,
    parent_id: int | None = None,
    links: LinkBuilder | None = None,
) -> PostedComment:
    """Store a comment (or reply) and email whoever it concerns.

    A failed email does not undo the comment; the outcome is reported back.
    """

    if not body.strip():
        raise ValueError("Comment body cannot be empty")

    if UserRepository(session).get(author_id) is None:
        msg = f"User with id {author_id} not found"
        raise ValueError(msg)

    subject = CommentableRepository(session).get(commentable_type, commentable_id)
    if subject is None:
        msg = f"{commentable_type.capitalize()} with id {commentable_id} not found"
        raise ValueError(msg)

    comments = CommentRepository(session)
    if parent_id is not None:
        parent = comments.get(parent_id)
        if parent is None:
            msg = f"Comment with id {parent_id} not found"
            raise ValueError(msg)
        if (parent.commentable_type, parent.commentable_id) != (subject.kind, subject.id):
            raise ValueError("The parent comment belongs to a different thread")

    comment = comments.create(
        Comment(
            id=None,
            commentable_type=subject.kind,
            commentable_id=subject.id,
            author_id=author_id,
            body=body,
            parent_id=parent_id,
        )
    )
    outcome = notify_comment_created(session, mailer, comment=comment, links=links)
    return PostedComment(comment=comment, notification=outcome)


__all__ = ["PostedComment", "post_comment"]
