"""Repository implementations for infrastructure layer."""

from .announcement_repository import AnnouncementRepository
from .comment_repository import CommentRepository
from .commentable_repository import CommentableRepository
from .direct_message_repository import DirectMessageRepository
from .notification_repository import NotificationRepository
from .spending_proposal_repository import SpendingProposalRepository
from .user_repository import UserRepository
from .vote_repository import VoteRepository

__all__ = [
    "AnnouncementRepository",
    "CommentRepository",
    "CommentableRepository",
    "DirectMessageRepository",
    "NotificationRepository",
    "SpendingProposalRepository",
    "UserRepository",
    "VoteRepository",
]
