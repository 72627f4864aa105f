"""Public helpers for emitting notifications."""

from .announcements import PublishedAnnouncement, publish_announcement, record_notification
from .dispatch import (
    DirectMessageDispatch,
    DispatchOutcome,
    notify_comment_created,
    notify_direct_message_sent,
)
from .resolver import NotifiableResolver

__all__ = [
    "DirectMessageDispatch",
    "DispatchOutcome",
    "NotifiableResolver",
    "PublishedAnnouncement",
    "notify_comment_created",
    "notify_direct_message_sent",
    "publish_announcement",
    "record_notification",
]
