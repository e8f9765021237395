"""
Database engine and session management.

Provides the SQLAlchemy engine and session factory backing the
key-value storage.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from cardledger.config import settings
from cardledger.models.db import Base

engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=True,
)

session_factory = sessionmaker(
    engine,
    class_=Session,
    expire_on_commit=False,
)


def init_db() -> None:
    """
    Initialize database tables.

    Creates all tables defined in the ORM models.
    Should be called once at application startup.
    """
    Base.metadata.create_all(engine)
