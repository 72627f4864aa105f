"""SQLAlchemy model for the notification ledger."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String

from civicmail.infrastructure.database import Base
from civicmail.utils import storage_now


class NotificationModel(Base):
    """Pending (``emailed_at`` empty) or delivered ledger entry for a user."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_pending", "user_id", "emailed_at", "expired_at"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    notifiable_type = Column(String(40), nullable=False)
    notifiable_id = Column(Integer, nullable=False)
    subject_type = Column(String(30), nullable=True)
    subject_id = Column(Integer, nullable=True)
    counter = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime, nullable=False, default=storage_now)
    emailed_at = Column(DateTime, nullable=True)
    expired_at = Column(DateTime, nullable=True)


__all__ = ["NotificationModel"]
