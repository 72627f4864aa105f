import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from civicmail.config import get_settings
from civicmail.infrastructure.database import engine, initialize_database
from civicmail.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release connections on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    app = FastAPI(title=f"{settings.app_name} mailer", lifespan=lifespan)

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_routes(app)
    logger.debug("Application %s configured", settings.app_name)
    return app


app = create_app()
