"""Endpoints exposing the notification ledger of the acting user."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from civicmail.domain.entities import User
from civicmail.infrastructure.database import get_db
from civicmail.infrastructure.repositories import NotificationRepository
from civicmail.interfaces.api.dependencies import get_current_user
from civicmail.interfaces.api.schemas import NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    pending: bool = Query(False, description="Only entries not yet emailed nor expired"),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[NotificationRead]:
    """Return the most recent ledger entries for the acting user."""

    notifications = NotificationRepository(db).list_for_user(
        current_user.id, pending_only=pending, limit=limit
    )
    return [NotificationRead.model_validate(notification) for notification in notifications]
