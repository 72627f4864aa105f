"""Persistence helpers for proposals and debates."""

from __future__ import annotations

from sqlalchemy.orm import Session

from civicmail.domain.entities import COMMENTABLE_TYPES, Commentable, Debate, Proposal
from civicmail.infrastructure.models import DebateModel, ProposalModel
from civicmail.utils import from_storage, to_storage

_MODELS: dict[str, type[ProposalModel] | type[DebateModel]] = {
    Proposal.kind: ProposalModel,
    Debate.kind: DebateModel,
}


class CommentableRepository:
    """Load and store the subjects users comment on and support."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, kind: str, subject_id: int) -> Commentable | None:
        model_class = _MODELS.get(kind)
        if model_class is None:
            return None
        model = self.session.get(model_class, subject_id)
        return self._to_entity(kind, model) if model else None

    def get_map(
        self, keys: set[tuple[str, int]]
    ) -> dict[tuple[str, int], Commentable]:
        """Return the subjects identified by ``(kind, id)`` pairs."""

        found: dict[tuple[str, int], Commentable] = {}
        for kind, model_class in _MODELS.items():
            ids = {subject_id for key_kind, subject_id in keys if key_kind == kind}
            if not ids:
                continue
            query = self.session.query(model_class).filter(model_class.id.in_(ids))
            for model in query.all():
                found[(kind, model.id)] = self._to_entity(kind, model)
        return found

    def create(self, commentable: Commentable) -> Commentable:
        model_class = _MODELS.get(commentable.kind)
        if model_class is None:
            msg = f"Unsupported commentable type '{commentable.kind}'"
            raise ValueError(msg)
        model = model_class(
            title=commentable.title,
            description=commentable.description,
            author_id=commentable.author_id,
        )
        if commentable.created_at is not None:
            model.created_at = to_storage(commentable.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(commentable.kind, model)

    @staticmethod
    def _to_entity(kind: str, model: ProposalModel | DebateModel) -> Commentable:
        entity_class = COMMENTABLE_TYPES[kind]
        return entity_class(
            id=model.id,
            title=model.title,
            author_id=model.author_id,
            description=model.description or "",
            created_at=from_storage(model.created_at),
        )


__all__ = ["CommentableRepository"]
