"""SQLAlchemy model for comments and replies."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from civicmail.infrastructure.database import Base
from civicmail.utils import storage_now


class CommentModel(Base):
    """Comment on a proposal or debate; ``parent_id`` is set for replies."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    commentable_type = Column(String(30), nullable=False)
    commentable_id = Column(Integer, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    body = Column(Text, nullable=False)
    parent_id = Column(Integer, ForeignKey("comments.id"), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)


__all__ = ["CommentModel"]
