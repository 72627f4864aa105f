"""Persistence helpers for comments."""

from __future__ import annotations

from sqlalchemy.orm import Session

from civicmail.domain.entities import Comment
from civicmail.infrastructure.models import CommentModel
from civicmail.utils import from_storage


class CommentRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, comment_id: int) -> Comment | None:
        model = self.session.get(CommentModel, comment_id)
        return self._to_entity(model) if model else None

    def create(self, comment: Comment) -> Comment:
        model = CommentModel(
            commentable_type=comment.commentable_type,
            commentable_id=comment.commentable_id,
            user_id=comment.author_id,
            body=comment.body,
            parent_id=comment.parent_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: CommentModel) -> Comment:
        return Comment(
            id=model.id,
            commentable_type=model.commentable_type,
            commentable_id=model.commentable_id,
            author_id=model.user_id,
            body=model.body,
            parent_id=model.parent_id,
            created_at=from_storage(model.created_at),
        )


__all__ = ["CommentRepository"]
