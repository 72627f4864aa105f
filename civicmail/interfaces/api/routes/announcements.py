"""Routes for publishing announcements to supporters."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from civicmail.application.use_cases import publish_announcement as publish_announcement_uc
from civicmail.domain.entities import User
from civicmail.infrastructure.database import get_db
from civicmail.interfaces.api.dependencies import get_current_user
from civicmail.interfaces.api.schemas import AnnouncementCreate, AnnouncementRead

router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.post("", response_model=AnnouncementRead, status_code=status.HTTP_201_CREATED)
def publish_announcement(
    announcement_in: AnnouncementCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Store an announcement and queue it for the next digest run."""

    try:
        published = publish_announcement_uc(
            db,
            subject_type=announcement_in.subject_type,
            subject_id=announcement_in.subject_id,
            author_id=current_user.id,
            title=announcement_in.title,
            body=announcement_in.body,
            recipient_ids=announcement_in.recipient_ids,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    announcement = published.announcement
    return AnnouncementRead(
        id=announcement.id,
        subject_type=announcement.subject_type,
        subject_id=announcement.subject_id,
        author_id=announcement.author_id,
        title=announcement.title,
        body=announcement.body,
        created_at=announcement.created_at,
        queued_for=len(published.notifications),
    )
