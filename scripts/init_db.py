#!/usr/bin/env python3
"""
Standalone database initialization script
Creates the MongoDB indexes the API relies on. Safe to run repeatedly.
"""

import logging
import os
import sys

# Ensure we're using the right Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from pymongo.errors import PyMongoError

from adapters import mongo_adapter
from app.config import settings, MONGO_URI, MONGO_DB

logger = logging.getLogger("darents.scripts.init_db")


def main() -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()), format=settings.log_format
    )
    try:
        mongo_adapter.connect(MONGO_URI, MONGO_DB)
        mongo_adapter.ensure_indexes()
    except PyMongoError as exc:
        logger.error("Database initialization failed: %s", exc)
        return 1
    finally:
        mongo_adapter.close()

    logger.info("Database %s is ready", MONGO_DB)
    return 0


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("Darents Database Initialization")
    print("=" * 60)
    print(f"\nMongoDB: {MONGO_URI} (database: {MONGO_DB})")
    print("  • households, pets, activities, users, accounts indexes")
    print("  • TTL index on revoked_tokens")
    print("\n" + "=" * 60 + "\n")

    sys.exit(main())
