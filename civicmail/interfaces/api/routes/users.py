"""Routes for signing up and recovering accounts."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from civicmail.application.use_cases.users import (
    confirm_user as confirm_user_uc,
    register_user as register_user_uc,
    request_password_reset as request_password_reset_uc,
)
from civicmail.domain.entities import NotificationPreferences, User
from civicmail.infrastructure.database import get_db
from civicmail.infrastructure.links import LinkBuilder
from civicmail.infrastructure.mail import Mailer
from civicmail.interfaces.api.dependencies import get_link_builder, get_mailer
from civicmail.interfaces.api.schemas import PasswordResetRequest, UserCreate, UserRead

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


def _to_read_model(user: User) -> UserRead:
    return UserRead.model_validate(user)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    links: LinkBuilder = Depends(get_link_builder),
):
    """Create an account and email its confirmation instructions."""

    try:
        user = register_user_uc(
            db,
            mailer,
            name=user_in.name,
            email=user_in.email,
            locale=user_in.locale,
            preferences=NotificationPreferences(**user_in.preferences.model_dump()),
            links=links,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_read_model(user)


@router.get("/confirmation", response_model=UserRead)
def confirm_user(
    confirmation_token: str = Query(..., min_length=1),
    db: Session = Depends(get_db),
):
    """Confirm the account owning ``confirmation_token``."""

    try:
        user = confirm_user_uc(db, token=confirmation_token)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _to_read_model(user)


@router.post("/password", status_code=status.HTTP_202_ACCEPTED)
def request_password_reset(
    payload: PasswordResetRequest,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    links: LinkBuilder = Depends(get_link_builder),
):
    """Email reset instructions; the answer is the same for unknown addresses."""

    try:
        request_password_reset_uc(db, mailer, email=payload.email, links=links)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return {"detail": "If the address is registered you will receive reset instructions"}
