"""Routes for private messages between users."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from civicmail.application.use_cases import send_direct_message as send_direct_message_uc
from civicmail.domain.entities import User
from civicmail.infrastructure.database import get_db
from civicmail.infrastructure.links import LinkBuilder
from civicmail.infrastructure.mail import Mailer
from civicmail.interfaces.api.dependencies import (
    get_current_user,
    get_link_builder,
    get_mailer,
)
from civicmail.interfaces.api.schemas import (
    DirectMessageCreate,
    DirectMessageCreated,
    DirectMessageRead,
)

router = APIRouter(prefix="/direct-messages", tags=["direct-messages"])


@router.post("", response_model=DirectMessageCreated, status_code=status.HTTP_201_CREATED)
def send_direct_message(
    message_in: DirectMessageCreate,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    links: LinkBuilder = Depends(get_link_builder),
    current_user: User = Depends(get_current_user),
):
    try:
        sent = send_direct_message_uc(
            db,
            mailer,
            sender_id=current_user.id,
            receiver_id=message_in.receiver_id,
            title=message_in.title,
            body=message_in.body,
            links=links,
        )
    except ValueError as exc:
        status_code = status.HTTP_400_BAD_REQUEST
        if str(exc).endswith("not found"):
            status_code = status.HTTP_404_NOT_FOUND
        raise HTTPException(status_code=status_code, detail=str(exc)) from exc

    return DirectMessageCreated(
        message=DirectMessageRead.model_validate(sent.message),
        receiver_notification=sent.notification.receiver.value,
        sender_notification=sent.notification.sender.value,
    )
