"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from civicmail.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def build_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for ``database_url``."""

    connect_args: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        # Digest workers use their own threads and sessions.
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(get_settings().database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database(bind: Engine | None = None) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from civicmail.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=bind or engine, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


__all__ = ["Base", "SessionLocal", "build_engine", "engine", "get_db", "initialize_database"]
