"""Database initialization."""

import logging

from wealthvue.database import Base, engine

# Registers every model on Base.metadata
import wealthvue.models  # noqa: F401

logger = logging.getLogger(__name__)


def create_tables():
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_tables()
