"""SQLAlchemy model for the users table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import expression

from civicmail.infrastructure.database import Base
from civicmail.utils import storage_now


class UserModel(Base):
    """Database representation of a platform user and their email preferences."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(60), nullable=False)
    email = Column(String(120), nullable=False, unique=True, index=True)
    locale = Column(String(10), nullable=False, default="en")
    email_on_comment = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    email_on_comment_reply = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    email_digest = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    confirmation_token = Column(String(64), nullable=True, unique=True)
    confirmed_at = Column(DateTime, nullable=True)
    reset_password_token = Column(String(64), nullable=True, unique=True)
    reset_password_sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)


__all__ = ["UserModel"]
