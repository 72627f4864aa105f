"""Persistence helpers for spending proposals."""

from __future__ import annotations

from sqlalchemy.orm import Session

from civicmail.domain.entities import SpendingProposal
from civicmail.infrastructure.models import SpendingProposalModel
from civicmail.utils import from_storage, to_storage


class SpendingProposalRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, proposal_id: int) -> SpendingProposal | None:
        model = self.session.get(SpendingProposalModel, proposal_id)
        return self._to_entity(model) if model else None

    def create(self, proposal: SpendingProposal) -> SpendingProposal:
        model = SpendingProposalModel()
        self._apply_entity_to_model(model, proposal)
        if proposal.created_at is not None:
            model.created_at = to_storage(proposal.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, proposal: SpendingProposal) -> SpendingProposal:
        model = (
            self.session.get(SpendingProposalModel, proposal.id)
            if proposal.id is not None
            else None
        )
        if model is None:
            msg = f"Spending proposal with id {proposal.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, proposal)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _apply_entity_to_model(
        model: SpendingProposalModel, proposal: SpendingProposal
    ) -> None:
        model.title = proposal.title
        model.description = proposal.description
        model.author_id = proposal.author_id
        model.feasible = proposal.feasible
        model.feasible_explanation = proposal.feasible_explanation
        model.valuation_finished = proposal.valuation_finished
        model.unfeasible_email_sent_at = to_storage(proposal.unfeasible_email_sent_at)

    @staticmethod
    def _to_entity(model: SpendingProposalModel) -> SpendingProposal:
        return SpendingProposal(
            id=model.id,
            title=model.title,
            author_id=model.author_id,
            description=model.description or "",
            feasible=model.feasible,
            feasible_explanation=model.feasible_explanation,
            valuation_finished=bool(model.valuation_finished),
            unfeasible_email_sent_at=from_storage(model.unfeasible_email_sent_at),
            created_at=from_storage(model.created_at),
        )


__all__ = ["SpendingProposalRepository"]
