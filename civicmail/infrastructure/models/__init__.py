"""ORM models used by the application infrastructure."""

from .announcement import AnnouncementModel
from .comment import CommentModel
from .debate import DebateModel
from .direct_message import DirectMessageModel
from .notification import NotificationModel
from .proposal import ProposalModel
from .spending_proposal import SpendingProposalModel
from .user import UserModel
from .vote import VoteModel

__all__ = [
    "AnnouncementModel",
    "CommentModel",
    "DebateModel",
    "DirectMessageModel",
    "NotificationModel",
    "ProposalModel",
    "SpendingProposalModel",
    "UserModel",
    "VoteModel",
]
