#!/usr/bin/env python3
"""
Standalone database initialization script.

Creates the unit, ingredient, recipe, recipe_ingredient and step tables in the
database named by DATABASE_URL. Existing tables are left untouched.
"""

import sys
import logging
from pathlib import Path

from sqlalchemy import inspect

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.models.database import engine, init_database  # noqa: E402

logger = logging.getLogger("recipe_catalog.init_db")


def main() -> int:
    """Create the schema and report the tables found afterwards"""
    try:
        init_database()
    except Exception as e:
        logger.error(f"Failed to initialize database: {e}", exc_info=True)
        return 1

    tables = inspect(engine).get_table_names()
    logger.info(f"Database ready with {len(tables)} tables: {', '.join(sorted(tables))}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    sys.exit(main())
