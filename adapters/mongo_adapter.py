"""MongoDB adapter for darents, households, pets and activity documents.
"""

from enum import Enum
from typing import Optional
import logging

import gridfs
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection as MongoCollection
from pymongo.database import Database

from app.config import MONGO_DB, MONGO_URI

logger = logging.getLogger("darents.mongo")

_client: Optional[MongoClient] = None
_db: Optional[Database] = None

PHOTO_BUCKET = "photos"


class Collection(str, Enum):
    """Names of the collections the application reads and writes."""

    HOUSEHOLDS = "households"
    PETS = "pets"
    ACTIVITIES = "activities"
    USERS = "users"
    ACCOUNTS = "accounts"
    REVOKED_TOKENS = "revoked_tokens"


# ------------------ Connection ------------------
def get_db() -> Database:
    """Lazy init DB connection."""
    global _client, _db
    if _db is not None:
        return _db
    _client = MongoClient(MONGO_URI, tz_aware=True)
    _db = _client[MONGO_DB]
    logger.info("Lazily connected to MongoDB database %s", MONGO_DB)
    return _db


def connect(uri: str, db_name: str = "darents"):
    """Open the client and verify the server answers a ping.

    Raises the driver error on failure so callers can retry.
    """
    global _client, _db
    client = MongoClient(uri, tz_aware=True)
    try:
        client.admin.command("ping")
    except Exception:
        client.close()
        raise
    _client = client
    _db = client[db_name]
    logger.info("Connected to MongoDB %s (database: %s)", uri, db_name)


def use_database(db: Database):
    """Bind an already constructed database, e.g. an in-memory one for tests."""
    global _client, _db
    _client = None
    _db = db


def close():
    """Close MongoDB connection."""
    global _client, _db
    try:
        if _client is not None:
            _client.close()
            logger.info("MongoDB client closed")
    finally:
        _client = None
        _db = None


def ping() -> bool:
    """Return True when the database answers."""
    if _db is None:
        return False
    try:
        _db.command("ping")
        return True
    except Exception:
        logger.warning("MongoDB ping failed", exc_info=True)
        return False


def collection(name: Collection, db: Optional[Database] = None) -> MongoCollection:
    db = db if db is not None else get_db()
    return db[Collection(name).value]


def photo_bucket(db: Optional[Database] = None) -> gridfs.GridFSBucket:
    return gridfs.GridFSBucket(
        db if db is not None else get_db(), bucket_name=PHOTO_BUCKET
    )


def ensure_indexes():
    """Create the indexes backing the queries issued by the repositories."""
    households = collection(Collection.HOUSEHOLDS)
    households.create_index([("member_uids", ASCENDING), ("created_at", DESCENDING)])

    pets = collection(Collection.PETS)
    pets.create_index("owner_uid")
    pets.create_index("household_id")

    activities = collection(Collection.ACTIVITIES)
    activities.create_index([("pet_id", ASCENDING), ("timestamp", DESCENDING)])

    accounts = collection(Collection.ACCOUNTS)
    accounts.create_index(
        "email", unique=True, partialFilterExpression={"email": {"$type": "string"}}
    )
    accounts.create_index("google_sub", sparse=True)
    accounts.create_index("apple_sub", sparse=True)

    revoked = collection(Collection.REVOKED_TOKENS)
    revoked.create_index("expires_at", expireAfterSeconds=0)

    logger.info("MongoDB indexes ensured")
