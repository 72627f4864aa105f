from .announcement import AnnouncementCreate, AnnouncementRead
from .comment import CommentCreate, CommentCreated, CommentRead
from .digest import DigestRunRead, DigestRunRequest
from .direct_message import DirectMessageCreate, DirectMessageCreated, DirectMessageRead
from .notification import NotificationRead
from .spending_proposal import SpendingProposalRead, ValuationUpdate
from .user import NotificationPreferencesSchema, PasswordResetRequest, UserCreate, UserRead

__all__ = [
    "AnnouncementCreate",
    "AnnouncementRead",
    "CommentCreate",
    "CommentCreated",
    "CommentRead",
    "DigestRunRead",
    "DigestRunRequest",
    "DirectMessageCreate",
    "DirectMessageCreated",
    "DirectMessageRead",
    "NotificationPreferencesSchema",
    "NotificationRead",
    "PasswordResetRequest",
    "SpendingProposalRead",
    "UserCreate",
    "UserRead",
    "ValuationUpdate",
]
