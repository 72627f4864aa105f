"""Use case to send password reset instructions to a user identified by email."""

from __future__ import annotations

import logging
import secrets
from dataclasses import replace

from sqlalchemy.orm import Session

from civicmail.infrastructure.links import LinkBuilder, get_link_builder
from civicmail.infrastructure.mail import Mailer, MailDelivery
from civicmail.infrastructure.mail.templates import TEMPLATE_RESET_PASSWORD
from civicmail.infrastructure.repositories import UserRepository
from civicmail.utils import now_in_app_timezone

from .validators import ensure_valid_email

logger = logging.getLogger(__name__)

SUBJECT_RESET_PASSWORD = "Instructions for resetting your password"


def request_password_reset(
    session: Session,
    mailer: Mailer,
    *,
    email: str,
    links: LinkBuilder | None = None,
) -> bool:
    """Store a reset token and email the reset link.

    Unknown addresses are ignored so the endpoint does not reveal which
    accounts exist. Returns ``True`` when an email was sent.
    """

    links = links or get_link_builder()
    repository = UserRepository(session)
    user = repository.get_by_email(ensure_valid_email(email))
    if user is None:
        logger.debug("Password reset requested for unknown address")
        return False

    user = repository.update(
        replace(
            user,
            reset_password_token=secrets.token_urlsafe(24),
            reset_password_sent_at=now_in_app_timezone(),
        )
    )
    sent = mailer.deliver(
        MailDelivery(
            recipient=user.email,
            subject=SUBJECT_RESET_PASSWORD,
            template=TEMPLATE_RESET_PASSWORD,
            variables={
                "recipient_name": user.name,
                "edit_password_url": links.edit_password(user.reset_password_token),
            },
        )
    )
    return sent is not None


__all__ = ["SUBJECT_RESET_PASSWORD", "request_password_reset"]
