"""Use case for recording a valuator's verdict on a spending proposal."""

from __future__ import annotations

import logging
from dataclasses import replace

from sqlalchemy.orm import Session

from civicmail.domain.entities import SpendingProposal
from civicmail.infrastructure.mail import Mailer, MailDelivery
from civicmail.infrastructure.mail.templates import TEMPLATE_UNFEASIBLE_SPENDING_PROPOSAL
from civicmail.infrastructure.repositories import SpendingProposalRepository, UserRepository
from civicmail.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

SUBJECT_UNFEASIBLE = "Your investment project '{code}' has been marked as unfeasible"


def valuate_spending_proposal(
    session: Session,
    mailer: Mailer,
    *,
    proposal_id: int,
    feasible: bool | None,
    feasible_explanation: str | None = None,
    valuation_finished: bool = False,
) -> SpendingProposal:
    """Store the valuation and tell the author once it ends as unfeasible."""

    repository = SpendingProposalRepository(session)
    proposal = repository.get(proposal_id)
    if proposal is None:
        msg = f"Spending proposal with id {proposal_id} not found"
        raise ValueError(msg)

    explanation = (feasible_explanation or "").strip() or None
    if feasible is False and valuation_finished and explanation is None:
        raise ValueError("An explanation is required to mark a project as unfeasible")

    proposal = repository.update(
        replace(
            proposal,
            feasible=feasible,
            feasible_explanation=explanation,
            valuation_finished=valuation_finished,
        )
    )

    if proposal.is_unfeasible and proposal.unfeasible_email_sent_at is None:
        proposal = _notify_unfeasible(session, mailer, proposal)
    return proposal


def _notify_unfeasible(
    session: Session, mailer: Mailer, proposal: SpendingProposal
) -> SpendingProposal:
    author = (
        UserRepository(session).get(proposal.author_id)
        if proposal.author_id is not None
        else None
    )
    if author is None:
        logger.debug("Spending proposal %s has no author to notify", proposal.id)
        return proposal

    sent = mailer.deliver(
        MailDelivery(
            recipient=author.email,
            subject=SUBJECT_UNFEASIBLE.format(code=proposal.code),
            template=TEMPLATE_UNFEASIBLE_SPENDING_PROPOSAL,
            variables={
                "recipient_name": author.name,
                "title": proposal.title,
                "code": proposal.code,
                "explanation": proposal.feasible_explanation,
            },
        )
    )
    if sent is None:
        return proposal

    return SpendingProposalRepository(session).update(
        replace(proposal, unfeasible_email_sent_at=now_in_app_timezone())
    )


__all__ = ["SUBJECT_UNFEASIBLE", "valuate_spending_proposal"]
