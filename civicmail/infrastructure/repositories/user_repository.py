"""Persistence layer for user data and email preferences."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import exists
from sqlalchemy.orm import Session

from civicmail.domain.entities import NotificationPreferences, User
from civicmail.infrastructure.models import NotificationModel, UserModel
from civicmail.utils import from_storage, to_storage


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self._get_model(email=email.strip().lower())
        return self._to_entity(model) if model else None

    def get_by_confirmation_token(self, token: str) -> User | None:
        model = self._get_model(confirmation_token=token)
        return self._to_entity(model) if model else None

    def get_preferences(self, user_id: int) -> NotificationPreferences | None:
        """Return a snapshot of the email flags for ``user_id``."""

        model = self.session.get(UserModel, user_id)
        return self._preferences(model) if model else None

    def get_map_by_ids(self, user_ids: Sequence[int | None]) -> dict[int, User]:
        unique_ids = {int(user_id) for user_id in user_ids if user_id is not None}
        if not unique_ids:
            return {}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def list_digest_recipient_ids(self) -> list[int]:
        """Return users that opted into the digest and have pending entries."""

        pending = exists().where(
            NotificationModel.user_id == UserModel.id,
            NotificationModel.emailed_at.is_(None),
            NotificationModel.expired_at.is_(None),
        )
        query = (
            self.session.query(UserModel.id)
            .filter(UserModel.email_digest.is_(True))
            .filter(pending)
            .order_by(UserModel.id)
        )
        return [user_id for (user_id,) in query.all()]

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        if user.created_at is not None:
            model.created_at = to_storage(user.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id) if user.id is not None else None
        if model is None:
            msg = f"User with id {user.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, **filters) -> UserModel | None:
        return self.session.query(UserModel).filter_by(**filters).first()

    @staticmethod
    def _preferences(model: UserModel) -> NotificationPreferences:
        return NotificationPreferences(
            email_on_comment=bool(model.email_on_comment),
            email_on_comment_reply=bool(model.email_on_comment_reply),
            email_digest=bool(model.email_digest),
        )

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            locale=model.locale,
            preferences=UserRepository._preferences(model),
            confirmation_token=model.confirmation_token,
            confirmed_at=from_storage(model.confirmed_at),
            reset_password_token=model.reset_password_token,
            reset_password_sent_at=from_storage(model.reset_password_sent_at),
            created_at=from_storage(model.created_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.name = user.name
        model.email = user.email.strip().lower()
        model.locale = user.locale
        model.email_on_comment = user.preferences.email_on_comment
        model.email_on_comment_reply = user.preferences.email_on_comment_reply
        model.email_digest = user.preferences.email_digest
        model.confirmation_token = user.confirmation_token
        model.confirmed_at = to_storage(user.confirmed_at)
        model.reset_password_token = user.reset_password_token
        model.reset_password_sent_at = to_storage(user.reset_password_sent_at)


__all__ = ["UserRepository"]
