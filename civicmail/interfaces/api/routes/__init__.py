from fastapi import FastAPI

from .announcements import router as announcements_router
from .comments import router as comments_router
from .digests import router as digests_router
from .direct_messages import router as direct_messages_router
from .notifications import router as notifications_router
from .spending_proposals import router as spending_proposals_router
from .users import router as users_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(users_router)
    app.include_router(comments_router)
    app.include_router(direct_messages_router)
    app.include_router(announcements_router)
    app.include_router(notifications_router)
    app.include_router(digests_router)
    app.include_router(spending_proposals_router)
