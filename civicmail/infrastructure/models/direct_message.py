"""SQLAlchemy model for private messages."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text

from civicmail.infrastructure.database import Base
from civicmail.utils import storage_now


class DirectMessageModel(Base):
    __tablename__ = "direct_messages"

    id = Column(Integer, primary_key=True, index=True)
    sender_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(120), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime, nullable=False, default=storage_now)


__all__ = ["DirectMessageModel"]
