"""Persistence helpers for private messages."""

from __future__ import annotations

from sqlalchemy.orm import Session

from civicmail.domain.entities import DirectMessage
from civicmail.infrastructure.models import DirectMessageModel
from civicmail.utils import from_storage


class DirectMessageRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, message_id: int) -> DirectMessage | None:
        model = self.session.get(DirectMessageModel, message_id)
        return self._to_entity(model) if model else None

    def create(self, message: DirectMessage) -> DirectMessage:
        model = DirectMessageModel(
            sender_id=message.sender_id,
            receiver_id=message.receiver_id,
            title=message.title,
            body=message.body,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: DirectMessageModel) -> DirectMessage:
        return DirectMessage(
            id=model.id,
            sender_id=model.sender_id,
            receiver_id=model.receiver_id,
            title=model.title,
            body=model.body,
            created_at=from_storage(model.created_at),
        )


__all__ = ["DirectMessageRepository"]
