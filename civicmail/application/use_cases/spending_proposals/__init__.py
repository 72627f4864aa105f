"""Use cases for participatory budgeting projects."""

from .valuate import valuate_spending_proposal

__all__ = ["valuate_spending_proposal"]
