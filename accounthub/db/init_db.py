"""
Database initialization.

Creates all tables registered on the SQLModel metadata.
"""

import logging

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """
    Initialize database schema.

    Production deployments run the Alembic migrations instead; this is
    meant for local setups and tests.
    """
    # Import all models so SQLModel.metadata has them
    import accounthub.models  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("Tables created successfully")
