"""Aggregate application use cases."""

from .comments import PostedComment, post_comment
from .digests import expire_stale_notifications, run_digest, run_digest_async
from .direct_messages import SentDirectMessage, send_direct_message
from .notifications import publish_announcement
from .spending_proposals import valuate_spending_proposal
from .users import confirm_user, register_user, request_password_reset

__all__ = [
    "PostedComment",
    "SentDirectMessage",
    "confirm_user",
    "expire_stale_notifications",
    "post_comment",
    "publish_announcement",
    "register_user",
    "request_password_reset",
    "run_digest",
    "run_digest_async",
    "send_direct_message",
    "valuate_spending_proposal",
]
