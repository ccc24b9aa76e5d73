"""
Database session configuration.

This module handles database engine creation and session management
using SQLAlchemy. The parcel store never uses it directly: callers open a
session here (or anywhere else) and hand it to the store.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from tracker.app.core.config import settings

# Create engine
engine = create_engine(
    settings.database_url,
    echo=settings.db_echo,
)

# Create session factory
SessionLocal = sessionmaker(
    engine,
    class_=Session,
    expire_on_commit=False,
    autoflush=False,
)

# Create declarative base for models
Base = declarative_base()


def init_db(bind: Engine = engine) -> None:
    """Create the parcel table if it does not exist yet."""
    # Import models to ensure they are registered with Base
    from tracker.app.models.parcel import Parcel  # noqa: F401

    Base.metadata.create_all(bind)
