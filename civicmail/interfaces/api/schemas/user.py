"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class NotificationPreferencesSchema(BaseModel):
    email_on_comment: bool = False
    email_on_comment_reply: bool = False
    email_digest: bool = True

    model_config = ConfigDict(from_attributes=True)


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=60)
    email: EmailStr
    locale: str = Field(default="en", max_length=10)
    preferences: NotificationPreferencesSchema = Field(
        default_factory=NotificationPreferencesSchema
    )


class UserRead(BaseModel):
    id: int
    name: str
    email: EmailStr
    locale: str
    preferences: NotificationPreferencesSchema
    confirmed_at: datetime | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class PasswordResetRequest(BaseModel):
    email: EmailStr


__all__ = [
    "NotificationPreferencesSchema",
    "PasswordResetRequest",
    "UserCreate",
    "UserRead",
]
