"""Persistence helpers for announcements."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.orm import Session

from civicmail.domain.entities import Announcement
from civicmail.infrastructure.models import AnnouncementModel
from civicmail.utils import from_storage


class AnnouncementRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, announcement_id: int) -> Announcement | None:
        model = self.session.get(AnnouncementModel, announcement_id)
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, ids: Iterable[int]) -> dict[int, Announcement]:
        unique_ids = set(ids)
        if not unique_ids:
            return {}
        query = self.session.query(AnnouncementModel).filter(
            AnnouncementModel.id.in_(unique_ids)
        )
        return {model.id: self._to_entity(model) for model in query.all()}

    def create(self, announcement: Announcement) -> Announcement:
        model = AnnouncementModel(
            subject_type=announcement.subject_type,
            subject_id=announcement.subject_id,
            author_id=announcement.author_id,
            title=announcement.title,
            body=announcement.body,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, announcement_id: int) -> bool:
        model = self.session.get(AnnouncementModel, announcement_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _to_entity(model: AnnouncementModel) -> Announcement:
        return Announcement(
            id=model.id,
            subject_type=model.subject_type,
            subject_id=model.subject_id,
            author_id=model.author_id,
            title=model.title,
            body=model.body,
            created_at=from_storage(model.created_at),
        )


__all__ = ["AnnouncementRepository"]
