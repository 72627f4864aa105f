"""Use case for signing up a new user."""

from __future__ import annotations

import logging
import secrets

from sqlalchemy.orm import Session

from civicmail.domain.entities import NotificationPreferences, User
from civicmail.infrastructure.links import LinkBuilder, get_link_builder
from civicmail.infrastructure.mail import Mailer, MailDelivery
from civicmail.infrastructure.mail.templates import TEMPLATE_CONFIRMATION
from civicmail.infrastructure.repositories import UserRepository
from civicmail.utils import now_in_app_timezone

from .validators import ensure_valid_email

logger = logging.getLogger(__name__)

SUBJECT_CONFIRMATION = "Confirmation instructions"


def register_user(
    session: Session,
    mailer: Mailer,
    *,
    name: str,
    email: str,
    locale: str = "en",
    preferences: NotificationPreferences | None = None,
    links: LinkBuilder | None = None,
) -> User:
    """Create an unconfirmed account and email its confirmation link."""

    links = links or get_link_builder()
    normalized_email = ensure_valid_email(email)
    repository = UserRepository(session)
    if repository.get_by_email(normalized_email):
        raise ValueError("The email address is already registered")

    user = repository.create(
        User(
            id=None,
            name=name.strip(),
            email=normalized_email,
            locale=locale,
            preferences=preferences or NotificationPreferences(),
            confirmation_token=secrets.token_urlsafe(24),
            created_at=now_in_app_timezone(),
        )
    )

    sent = mailer.deliver(
        MailDelivery(
            recipient=user.email,
            subject=SUBJECT_CONFIRMATION,
            template=TEMPLATE_CONFIRMATION,
            variables={
                "recipient_name": user.name,
                "confirmation_url": links.user_confirmation(user.confirmation_token),
            },
        )
    )
    if sent is None:
        logger.error("Confirmation instructions for user %s were not delivered", user.id)
    return user


__all__ = ["SUBJECT_CONFIRMATION", "register_user"]
