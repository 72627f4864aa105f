"""Use case for sending private messages between users."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from civicmail.domain.entities import DirectMessage
from civicmail.infrastructure.links import LinkBuilder
from civicmail.infrastructure.mail import Mailer
from civicmail.infrastructure.repositories import DirectMessageRepository, UserRepository

from .notifications import DirectMessageDispatch, notify_direct_message_sent


@dataclass(frozen=True)
class SentDirectMessage:
    message: DirectMessage
    notification: DirectMessageDispatch


def send_direct_message(
    session: Session,
    mailer: Mailer,
    *,
    sender_id: int,
    receiver_id: int,
    title: str,
    body: str,
    links: LinkBuilder | None = None,
) -> SentDirectMessage:
    if sender_id == receiver_id:
        raise ValueError("You cannot send a private message to yourself")

    users = UserRepository(session).get_map_by_ids([sender_id, receiver_id])
    for user_id in (sender_id, receiver_id):
        if user_id not in users:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)

    message = DirectMessageRepository(session).create(
        DirectMessage(
            id=None,
            sender_id=sender_id,
            receiver_id=receiver_id,
            title=title,
            body=body,
        )
    )
    dispatch = notify_direct_message_sent(session, mailer, message=message, links=links)
    return SentDirectMessage(message=message, notification=dispatch)


__all__ = ["SentDirectMessage", "send_direct_message"]
