"""Use case for confirming an account from its emailed token."""

from dataclasses import replace

from sqlalchemy.orm import Session

from civicmail.domain.entities import User
from civicmail.infrastructure.repositories import UserRepository
from civicmail.utils import now_in_app_timezone


def confirm_user(session: Session, *, token: str) -> User:
    repository = UserRepository(session)
    user = repository.get_by_confirmation_token(token) if token else None
    if user is None:
        raise ValueError("Confirmation token is invalid")

    return repository.update(
        replace(user, confirmation_token=None, confirmed_at=now_in_app_timezone())
    )


__all__ = ["confirm_user"]
