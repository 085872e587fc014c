"""
Database configuration and session management.
"""

import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

logger = logging.getLogger("dinnerplan.database")

# Create SQLAlchemy Base
Base = declarative_base()

# Create engine
engine = create_engine(settings.database_url, echo=settings.db_echo, future=True)

# Create session factory
SessionLocal = sessionmaker(bind=engine, future=True)


def init_database(bind=None):
    """Initialize database schema"""
    target = bind if bind is not None else engine
    Base.metadata.create_all(bind=target)
    logger.info("Database tables created successfully")
