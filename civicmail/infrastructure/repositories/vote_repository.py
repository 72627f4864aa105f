"""Support lookups backed by the votes table."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from civicmail.domain.entities import Vote
from civicmail.infrastructure.models import VoteModel
from civicmail.utils import from_storage


class VoteRepository:
    """Record supports and answer which subjects a user supports."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, vote: Vote) -> Vote:
        """Store ``vote``; voting twice for the same subject is a no-op."""

        existing = (
            self.session.query(VoteModel)
            .filter_by(
                voter_id=vote.voter_id,
                votable_type=vote.votable_type,
                votable_id=vote.votable_id,
            )
            .first()
        )
        if existing is not None:
            return self._to_entity(existing)

        model = VoteModel(
            voter_id=vote.voter_id,
            votable_type=vote.votable_type,
            votable_id=vote.votable_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def supported_subjects(
        self, user_id: int, subjects: Iterable[tuple[str, int]]
    ) -> set[tuple[str, int]]:
        """Return the subset of ``(type, id)`` pairs supported by ``user_id``."""

        keys = set(subjects)
        if not keys:
            return set()
        conditions = [
            and_(VoteModel.votable_type == kind, VoteModel.votable_id == subject_id)
            for kind, subject_id in keys
        ]
        query = (
            self.session.query(VoteModel.votable_type, VoteModel.votable_id)
            .filter(VoteModel.voter_id == user_id)
            .filter(or_(*conditions))
        )
        return {(kind, subject_id) for kind, subject_id in query.all()}

    def list_voter_ids(self, votable_type: str, votable_id: int) -> list[int]:
        query = (
            self.session.query(VoteModel.voter_id)
            .filter_by(votable_type=votable_type, votable_id=votable_id)
            .order_by(VoteModel.id)
        )
        return [voter_id for (voter_id,) in query.all()]

    @staticmethod
    def _to_entity(model: VoteModel) -> Vote:
        return Vote(
            id=model.id,
            voter_id=model.voter_id,
            votable_type=model.votable_type,
            votable_id=model.votable_id,
            created_at=from_storage(model.created_at),
        )


__all__ = ["VoteRepository"]
