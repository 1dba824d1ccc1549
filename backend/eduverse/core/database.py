"""
Database configuration and session management for EduVerse.

Sets up the SQLAlchemy engine, session factory, and base model used by the
durable key-value store.
"""

from typing import Optional
from sqlalchemy import create_engine, MetaData
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
import logging

from .config import settings


# Configure logging
logger = logging.getLogger(__name__)


# SQLAlchemy metadata conventions for better constraint naming
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


# Base class for models
Base = declarative_base(metadata=metadata)


def build_engine(url: Optional[str] = None) -> Engine:
    """
    Create an engine for the given URL (defaults to STORAGE_URL).

    In-memory SQLite URLs share a single connection so every session sees
    the same database.

    Args:
        url: SQLAlchemy database URL

    Returns:
        Engine: Configured SQLAlchemy engine
    """
    url = url or settings.STORAGE_URL

    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url == "sqlite://":
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=settings.DEBUG, **kwargs)

    return create_engine(
        url,
        pool_pre_ping=True,  # Verify connections before using
        echo=settings.DEBUG, # Log SQL statements if in debug mode
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    """Session factory bound to the engine."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine
    )


def create_all_tables(engine: Engine) -> None:
    """Create all database tables."""
    # Import models to ensure they're registered
    from eduverse.models import storage  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("All database tables created successfully")
