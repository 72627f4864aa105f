"""SQLAlchemy model for debates."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from civicmail.infrastructure.database import Base
from civicmail.utils import storage_now


class DebateModel(Base):
    __tablename__ = "debates"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(80), nullable=False)
    description = Column(Text, nullable=False, default="")
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)


__all__ = ["DebateModel"]
