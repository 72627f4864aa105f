"""SQLAlchemy model for announcements published on proposals and debates."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from civicmail.infrastructure.database import Base
from civicmail.utils import storage_now


class AnnouncementModel(Base):
    __tablename__ = "announcements"

    id = Column(Integer, primary_key=True, index=True)
    subject_type = Column(String(30), nullable=False)
    subject_id = Column(Integer, nullable=False, index=True)
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    title = Column(String(120), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=storage_now)


__all__ = ["AnnouncementModel"]
