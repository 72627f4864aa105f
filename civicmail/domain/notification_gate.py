"""Pure decision rule for preference-gated notifications."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from .entities import NotificationPreferences


class NotificationTopic(str, Enum):
    """Topics a user can subscribe to in their email preferences."""

    COMMENT = "comment"
    COMMENT_REPLY = "comment_reply"
    DIGEST = "digest"


_TOPIC_FLAGS: dict[NotificationTopic, Callable[[NotificationPreferences], bool]] = {
    NotificationTopic.COMMENT: lambda preferences: preferences.email_on_comment,
    NotificationTopic.COMMENT_REPLY: lambda preferences: preferences.email_on_comment_reply,
    NotificationTopic.DIGEST: lambda preferences: preferences.email_digest,
}

SUPPRESSED_NO_RECIPIENT = "no_recipient"
SUPPRESSED_SELF_ACTION = "self_action"
SUPPRESSED_PREFERENCE = "preference_disabled"


@dataclass(frozen=True)
class NotificationDecision:
    """Describe whether a recipient should be emailed and why not."""

    should_send: bool
    reason: str | None = None


def evaluate_notification(
    *,
    actor_id: int | None,
    recipient_id: int | None,
    preferences: NotificationPreferences | None,
    topic: NotificationTopic,
) -> NotificationDecision:
    """Return the send/suppress decision for ``recipient_id``.

    Acting on your own content never notifies you, whatever your
    preferences say. Otherwise the recipient's flag for ``topic`` decides.
    """

    if recipient_id is None or preferences is None:
        return NotificationDecision(should_send=False, reason=SUPPRESSED_NO_RECIPIENT)

    if actor_id is not None and actor_id == recipient_id:
        return NotificationDecision(should_send=False, reason=SUPPRESSED_SELF_ACTION)

    if not _TOPIC_FLAGS[topic](preferences):
        return NotificationDecision(should_send=False, reason=SUPPRESSED_PREFERENCE)

    return NotificationDecision(should_send=True)


def should_notify(
    *,
    actor_id: int | None,
    recipient_id: int | None,
    preferences: NotificationPreferences | None,
    topic: NotificationTopic,
) -> bool:
    return evaluate_notification(
        actor_id=actor_id,
        recipient_id=recipient_id,
        preferences=preferences,
        topic=topic,
    ).should_send


__all__ = [
    "NotificationDecision",
    "NotificationTopic",
    "SUPPRESSED_NO_RECIPIENT",
    "SUPPRESSED_PREFERENCE",
    "SUPPRESSED_SELF_ACTION",
    "evaluate_notification",
    "should_notify",
]
