"""Routes for posting comments and replies."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from civicmail.application.use_cases import post_comment as post_comment_uc
from civicmail.domain.entities import User
from civicmail.infrastructure.database import get_db
from civicmail.infrastructure.links import LinkBuilder
from civicmail.infrastructure.mail import Mailer
from civicmail.interfaces.api.dependencies import (
    get_current_user,
    get_link_builder,
    get_mailer,
)
from civicmail.interfaces.api.schemas import CommentCreate, CommentCreated, CommentRead

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post("", response_model=CommentCreated, status_code=status.HTTP_201_CREATED)
def post_comment(
    comment_in: CommentCreate,
    db: Session = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
    links: LinkBuilder = Depends(get_link_builder),
    current_user: User = Depends(get_current_user),
):
    """Publish a comment and email its addressee when they opted in."""

    try:
        posted = post_comment_uc(
            db,
            mailer,
            author_id=current_user.id,
            commentable_type=comment_in.commentable_type,
            commentable_id=comment_in.commentable_id,
            body=comment_in.body,
            parent_id=comment_in.parent_id,
            links=links,
        )
    except ValueError as exc:
        status_code = status.HTTP_400_BAD_REQUEST
        if str(exc).endswith("not found"):
            status_code = status.HTTP_404_NOT_FOUND
        raise HTTPException(status_code=status_code, detail=str(exc)) from exc

    return CommentCreated(
        comment=CommentRead.model_validate(posted.comment),
        notification=posted.notification.value,
    )
