"""
Database initialization script.

Run this script to create the database tables without Alembic
(handy for SQLite and throwaway databases).

Usage:
    python scripts/init_db.py
"""

import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

load_dotenv()

from sqlalchemy.exc import SQLAlchemyError

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.init_db import init_db
from app.db.session import build_engine

logger = logging.getLogger("init_db")

if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        init_db(build_engine(settings))
    except SQLAlchemyError:
        logger.exception("Database initialization failed")
        sys.exit(1)

    logger.info("Database initialized")
