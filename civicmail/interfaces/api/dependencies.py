"""FastAPI dependency utilities."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from civicmail.domain.entities import User
from civicmail.infrastructure.database import SessionLocal, get_db
from civicmail.infrastructure.links import LinkBuilder
from civicmail.infrastructure.links import get_link_builder as _get_link_builder
from civicmail.infrastructure.mail import Mailer
from civicmail.infrastructure.mail import get_mailer as _get_mailer
from civicmail.infrastructure.repositories import UserRepository


def get_mailer() -> Mailer:
    """Return the mailer used to deliver emails."""

    return _get_mailer()


def get_link_builder() -> LinkBuilder:
    return _get_link_builder()


def get_session_factory():
    """Return the factory used by background work that needs its own sessions."""

    return SessionLocal


def get_current_user(
    x_user_id: int | None = Header(default=None),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the acting user from the ``X-User-Id`` header."""

    if x_user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )

    user = UserRepository(db).get(x_user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user


__all__ = [
    "get_current_user",
    "get_link_builder",
    "get_mailer",
    "get_session_factory",
]
