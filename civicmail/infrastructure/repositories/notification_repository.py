"""Persistence helpers for the notification ledger."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Iterable

from sqlalchemy.orm import Session

from civicmail.domain.entities import Notification
from civicmail.infrastructure.models import NotificationModel
from civicmail.utils import from_storage, now_in_app_timezone, to_storage


class NotificationRepository:
    """Record, list and settle :class:`Notification` ledger entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def record(self, notification: Notification) -> Notification:
        """Store ``notification`` unless an equivalent pending entry exists.

        A second event about the same notifiable for the same recipient bumps
        the ``counter`` of the pending entry instead of adding a new row.
        """

        existing = (
            self._pending_query(notification.recipient_id)
            .filter(NotificationModel.notifiable_type == notification.notifiable_type)
            .filter(NotificationModel.notifiable_id == notification.notifiable_id)
            .first()
        )
        if existing is not None:
            existing.counter = (existing.counter or 1) + 1
            self.session.add(existing)
            self.session.commit()
            self.session.refresh(existing)
            return self._to_entity(existing)

        model = NotificationModel(
            user_id=notification.recipient_id,
            notifiable_type=notification.notifiable_type,
            notifiable_id=notification.notifiable_id,
            subject_type=notification.subject_type,
            subject_id=notification.subject_id,
            counter=notification.counter or 1,
            created_at=to_storage(notification.created_at or now_in_app_timezone()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_user(
        self,
        user_id: int,
        *,
        pending_only: bool = False,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        if pending_only:
            query = self._pending_query(user_id)
        else:
            query = self.session.query(NotificationModel).filter(
                NotificationModel.user_id == user_id
            )
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_pending_for_user(self, user_id: int) -> Sequence[Notification]:
        """Return pending entries oldest first, the order digests present them."""

        query = self._pending_query(user_id).order_by(
            NotificationModel.created_at.asc(), NotificationModel.id.asc()
        )
        return [self._to_entity(model) for model in query.all()]

    def claim_pending(
        self,
        notification_ids: Iterable[int],
        *,
        user_id: int,
        emailed_at: datetime,
    ) -> int:
        """Stamp ``emailed_at`` on the given entries if they are still pending.

        The update only touches rows whose ``emailed_at`` is still empty, so
        concurrent runs cannot both claim the same entry. The transaction is
        left open: callers commit once the email went out, or roll back.
        Returns the number of rows claimed.
        """

        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        claimed = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.user_id == user_id,
                NotificationModel.emailed_at.is_(None),
                NotificationModel.expired_at.is_(None),
            )
            .update(
                {NotificationModel.emailed_at: to_storage(emailed_at)},
                synchronize_session=False,
            )
        )
        self.session.flush()
        return claimed

    def expire_pending_before(self, cutoff: datetime, *, expired_at: datetime) -> int:
        """Mark pending entries created before ``cutoff`` as expired."""

        expired = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.created_at < to_storage(cutoff),
                NotificationModel.emailed_at.is_(None),
                NotificationModel.expired_at.is_(None),
            )
            .update(
                {NotificationModel.expired_at: to_storage(expired_at)},
                synchronize_session=False,
            )
        )
        self.session.commit()
        return expired

    def _pending_query(self, user_id: int):
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.emailed_at.is_(None))
            .filter(NotificationModel.expired_at.is_(None))
        )

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.user_id,
            notifiable_type=model.notifiable_type,
            notifiable_id=model.notifiable_id,
            subject_type=model.subject_type,
            subject_id=model.subject_id,
            counter=model.counter or 1,
            created_at=from_storage(model.created_at),
            emailed_at=from_storage(model.emailed_at),
            expired_at=from_storage(model.expired_at),
        )


__all__ = ["NotificationRepository"]
