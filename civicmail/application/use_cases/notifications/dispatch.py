"""Immediate, single-recipient emails triggered by user activity."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy.orm import Session

from civicmail.domain.entities import COMMENTABLE_DEBATE, Comment, DirectMessage, User
from civicmail.domain.notifiables import (
    CommentNotifiable,
    DirectMessageNotifiable,
    ReplyNotifiable,
)
from civicmail.domain.notification_gate import NotificationTopic, evaluate_notification
from civicmail.infrastructure.links import LinkBuilder, get_link_builder
from civicmail.infrastructure.mail import Mailer, MailDelivery
from civicmail.infrastructure.mail.templates import (
    TEMPLATE_COMMENT,
    TEMPLATE_DIRECT_MESSAGE_RECEIVED,
    TEMPLATE_DIRECT_MESSAGE_SENT,
    TEMPLATE_REPLY,
)
from civicmail.infrastructure.repositories import (
    CommentableRepository,
    CommentRepository,
    UserRepository,
)

logger = logging.getLogger(__name__)

SUBJECT_COMMENT = "Someone has commented on your {label}"
SUBJECT_REPLY = "Someone has responded to your comment"
SUBJECT_DIRECT_MESSAGE_RECEIVED = "You have received a new private message"
SUBJECT_DIRECT_MESSAGE_SENT = "You have send a new private message"


class DispatchOutcome(str, Enum):
    SENT = "sent"
    SUPPRESSED = "suppressed"
    FAILED = "failed"


@dataclass(frozen=True)
class DirectMessageDispatch:
    """Outcome of the two emails sent for a private message."""

    receiver: DispatchOutcome
    sender: DispatchOutcome


def _deliver(mailer: Mailer, delivery: MailDelivery) -> DispatchOutcome:
    sent = mailer.deliver(delivery)
    return DispatchOutcome.SENT if sent is not None else DispatchOutcome.FAILED


def _gated_recipient(
    users: UserRepository,
    *,
    actor_id: int | None,
    recipient_id: int | None,
    topic: NotificationTopic,
) -> User | None:
    recipient = users.get(recipient_id) if recipient_id is not None else None
    decision = evaluate_notification(
        actor_id=actor_id,
        recipient_id=recipient.id if recipient else None,
        preferences=recipient.preferences if recipient else None,
        topic=topic,
    )
    if not decision.should_send:
        logger.debug(
            "Suppressed %s email for user %s: %s", topic.value, recipient_id, decision.reason
        )
        return None
    return recipient


def notify_comment_created(
    session: Session,
    mailer: Mailer,
    *,
    comment: Comment,
    links: LinkBuilder | None = None,
) -> DispatchOutcome:
    """Email the person the new comment is addressed to, if they want it.

    Top-level comments go to the author of the proposal or debate; replies
    go to the author of the comment being answered.
    """

    links = links or get_link_builder()
    subject = CommentableRepository(session).get(
        comment.commentable_type, comment.commentable_id
    )
    if subject is None:
        logger.debug("Comment %s has no commentable; nothing to notify", comment.id)
        return DispatchOutcome.SUPPRESSED

    users = UserRepository(session)
    author = users.get(comment.author_id) if comment.author_id is not None else None

    if comment.is_reply:
        parent = CommentRepository(session).get(comment.parent_id)
        if parent is None:
            logger.debug("Reply %s lost its parent comment", comment.id)
            return DispatchOutcome.SUPPRESSED
        reply = ReplyNotifiable.build(comment, author=author, parent=parent, subject=subject)
        return _notify_reply(users, mailer, reply, links)

    notifiable = CommentNotifiable.build(comment, author=author, subject=subject)
    recipient = _gated_recipient(
        users,
        actor_id=notifiable.author_id,
        recipient_id=subject.author_id,
        topic=NotificationTopic.COMMENT,
    )
    if recipient is None:
        return DispatchOutcome.SUPPRESSED

    variables = {
        "recipient_name": recipient.name,
        "author_name": author.name if author else "Someone",
        "subject_label": subject.label,
        "subject_title": subject.title,
        "subject_url": links.link_to(notifiable.target),
        "comment_body": notifiable.body,
    }
    if subject.kind == COMMENTABLE_DEBATE:
        variables["account_url"] = links.account()

    return _deliver(
        mailer,
        MailDelivery(
            recipient=recipient.email,
            subject=SUBJECT_COMMENT.format(label=subject.label),
            template=TEMPLATE_COMMENT,
            variables=variables,
        ),
    )


def _notify_reply(
    users: UserRepository,
    mailer: Mailer,
    reply: ReplyNotifiable,
    links: LinkBuilder,
) -> DispatchOutcome:
    recipient = _gated_recipient(
        users,
        actor_id=reply.author_id,
        recipient_id=reply.parent.author_id,
        topic=NotificationTopic.COMMENT_REPLY,
    )
    if recipient is None:
        return DispatchOutcome.SUPPRESSED

    return _deliver(
        mailer,
        MailDelivery(
            recipient=recipient.email,
            subject=SUBJECT_REPLY,
            template=TEMPLATE_REPLY,
            variables={
                "recipient_name": recipient.name,
                "author_name": reply.author.name if reply.author else "Someone",
                "reply_body": reply.body,
                "comment_url": links.link_to(reply.target),
                "account_url": links.account(),
            },
        ),
    )


def notify_direct_message_sent(
    session: Session,
    mailer: Mailer,
    *,
    message: DirectMessage,
    links: LinkBuilder | None = None,
) -> DirectMessageDispatch:
    """Email the receiver and send the sender a copy, regardless of preferences."""

    links = links or get_link_builder()
    users = UserRepository(session).get_map_by_ids([message.sender_id, message.receiver_id])
    sender = users.get(message.sender_id)
    receiver = users.get(message.receiver_id)
    if sender is None or receiver is None:
        logger.debug("Direct message %s has no resolvable participants", message.id)
        return DirectMessageDispatch(
            receiver=DispatchOutcome.SUPPRESSED, sender=DispatchOutcome.SUPPRESSED
        )

    notifiable = DirectMessageNotifiable.build(message, sender=sender, receiver=receiver)
    receiver_outcome = _deliver(
        mailer,
        MailDelivery(
            recipient=receiver.email,
            subject=SUBJECT_DIRECT_MESSAGE_RECEIVED,
            template=TEMPLATE_DIRECT_MESSAGE_RECEIVED,
            variables={
                "recipient_name": receiver.name,
                "title": notifiable.title,
                "body": notifiable.body,
                "sender_name": sender.name,
                "sender_url": links.link_to(notifiable.target),
            },
        ),
    )
    # The sender's copy names the receiver but does not link to them.
    sender_outcome = _deliver(
        mailer,
        MailDelivery(
            recipient=sender.email,
            subject=SUBJECT_DIRECT_MESSAGE_SENT,
            template=TEMPLATE_DIRECT_MESSAGE_SENT,
            variables={
                "recipient_name": sender.name,
                "title": notifiable.title,
                "body": notifiable.body,
                "receiver_name": receiver.name,
            },
        ),
    )
    return DirectMessageDispatch(receiver=receiver_outcome, sender=sender_outcome)


__all__ = [
    "DirectMessageDispatch",
    "DispatchOutcome",
    "SUBJECT_COMMENT",
    "SUBJECT_DIRECT_MESSAGE_RECEIVED",
    "SUBJECT_DIRECT_MESSAGE_SENT",
    "SUBJECT_REPLY",
    "notify_comment_created",
    "notify_direct_message_sent",
]
