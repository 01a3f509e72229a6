"""
Database initialization script.

Creates the training tables and seeds the built-in exercise catalog.

Usage:
    python scripts/init_db.py
"""

import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.core.logging import setup_logging
from app.db.init_db import init_db

logger = logging.getLogger("init_db")

if __name__ == "__main__":
    setup_logging()
    try:
        init_db(seed_catalog=True)
        logger.info("Database initialized")
        sys.exit(0)

    except Exception as e:
        logger.error("Database initialization failed: %s", e)
        sys.exit(1)
