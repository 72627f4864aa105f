"""Routes for valuating participatory budgeting projects."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from civicmail.application.use_cases import (
    valuate_spending_proposal as valuate_spending_proposal_uc,
)
from civicmail.infrastructure.database import get_db
from civicmail.infrastructure.mail import Mailer
from civicmail.interfaces.api.dependencies import get_current_user, get_mailer
from civicmail.interfaces.api.schemas import SpendingProposalRead, ValuationUpdate

router = APIRouter(
    prefix="/spending-proposals",
    tags=["spending-proposals"],
    dependencies=[Depends(get_current_user)],
)


@router.put("/{proposal_id}/valuation", response_model=SpendingProposalRead)
def valuate_spending_proposal(
    proposal_id: int,
    valuation_in: ValuationUpdate,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    """Record the valuation; authors of unfeasible projects are emailed once."""

    try:
        proposal = valuate_spending_proposal_uc(
            db,
            mailer,
            proposal_id=proposal_id,
            feasible=valuation_in.feasible,
            feasible_explanation=valuation_in.feasible_explanation,
            valuation_finished=valuation_in.valuation_finished,
        )
    except ValueError as exc:
        status_code = status.HTTP_400_BAD_REQUEST
        if str(exc).endswith("not found"):
            status_code = status.HTTP_404_NOT_FOUND
        raise HTTPException(status_code=status_code, detail=str(exc)) from exc
    return SpendingProposalRead.model_validate(proposal)
