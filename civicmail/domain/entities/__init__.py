"""Domain entities exposed by the application."""

from .announcement import Announcement
from .comment import Comment
from .commentable import (
    COMMENTABLE_DEBATE,
    COMMENTABLE_PROPOSAL,
    COMMENTABLE_TYPES,
    Commentable,
    Debate,
    Proposal,
)
from .direct_message import DirectMessage
from .notification import Notification
from .spending_proposal import SpendingProposal
from .user import NotificationPreferences, User
from .vote import Vote

__all__ = [
    "Announcement",
    "Comment",
    "COMMENTABLE_DEBATE",
    "COMMENTABLE_PROPOSAL",
    "COMMENTABLE_TYPES",
    "Commentable",
    "Debate",
    "DirectMessage",
    "Notification",
    "NotificationPreferences",
    "Proposal",
    "SpendingProposal",
    "User",
    "Vote",
]
