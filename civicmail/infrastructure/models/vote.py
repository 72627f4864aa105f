"""SQLAlchemy model for supports given to proposals and debates."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from civicmail.infrastructure.database import Base
from civicmail.utils import storage_now


class VoteModel(Base):
    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("voter_id", "votable_type", "votable_id", name="uq_vote_voter_votable"),
    )

    id = Column(Integer, primary_key=True, index=True)
    voter_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    votable_type = Column(String(30), nullable=False)
    votable_id = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=storage_now)


__all__ = ["VoteModel"]
