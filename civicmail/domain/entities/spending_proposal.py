"""Domain entity representing a participatory budgeting project."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class SpendingProposal:
    """Investment project evaluated by valuators."""

    id: int | None
    title: str
    author_id: int | None
    description: str = ""
    feasible: bool | None = None
    feasible_explanation: str | None = None
    valuation_finished: bool = False
    unfeasible_email_sent_at: datetime | None = None
    created_at: datetime | None = None

    @property
    def code(self) -> str:
        """Public reference shown to authors, e.g. ``2016-42``."""

        year = self.created_at.year if self.created_at else ""
        return f"{year}-{self.id}"

    @property
    def is_unfeasible(self) -> bool:
        return self.feasible is False and self.valuation_finished


__all__ = ["SpendingProposal"]
