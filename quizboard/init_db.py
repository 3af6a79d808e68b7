#!/usr/bin/env python3
"""
Database initialization script.
Run this with `python -m quizboard.init_db` to create all database tables.
"""

import logging
import sys

from sqlmodel import text

from quizboard.configs.database import engine, init_db

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def main():
    """Initialize the database schema."""
    logger.info(f"Initializing database schema at {engine.url.render_as_string(hide_password=True)}")
    try:
        # Test database connection first
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Database connection successful")

        init_db()
        logger.info("Database schema created successfully")
    except Exception as e:
        logger.error(f"Error initializing database ({type(e).__name__}): {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
