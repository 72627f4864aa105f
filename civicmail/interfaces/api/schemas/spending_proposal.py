"""Schemas for spending proposal valuations."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ValuationUpdate(BaseModel):
    feasible: bool | None = None
    feasible_explanation: str | None = Field(default=None, max_length=5000)
    valuation_finished: bool = False


class SpendingProposalRead(BaseModel):
    id: int
    title: str
    code: str
    author_id: int | None
    feasible: bool | None
    feasible_explanation: str | None
    valuation_finished: bool
    unfeasible_email_sent_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


__all__ = ["SpendingProposalRead", "ValuationUpdate"]
