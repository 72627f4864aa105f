"""SQLAlchemy model for participatory budgeting projects."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import expression

from civicmail.infrastructure.database import Base
from civicmail.utils import storage_now


class SpendingProposalModel(Base):
    __tablename__ = "spending_proposals"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(120), nullable=False)
    description = Column(Text, nullable=False, default="")
    author_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    feasible = Column(Boolean, nullable=True)
    feasible_explanation = Column(Text, nullable=True)
    valuation_finished = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    unfeasible_email_sent_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=storage_now)


__all__ = ["SpendingProposalModel"]
