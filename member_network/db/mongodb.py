"""
MongoDB Connection Utility

The document-store deployment keeps every entity in its own collection:
- users: account, approval state, profile, roles array, role sections
- opportunities, applications, investor_interests
- leaders, gallery_images, videos

Documents use string UUIDs as _id so ids look the same as in the
relational store.
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from member_network.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the configured database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str, db: Database = None) -> Collection:
    db = db if db is not None else get_mongo_db()
    return db[name]


def test_mongo_connection(client: MongoClient = None) -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        if client is None:
            client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "opportunities": "opportunities",
    "applications": "applications",
    "interests": "investor_interests",
    "leaders": "leaders",
    "gallery_images": "gallery_images",
    "videos": "videos",
}


def init_mongo_indexes(db: Database = None):
    """
    Create indexes for better query performance.
    Call this once during app startup.
    """
    db = db if db is not None else get_mongo_db()

    db[COLLECTIONS["users"]].create_index("email", unique=True)
    db[COLLECTIONS["users"]].create_index([("approval_status", ASCENDING), ("roles", ASCENDING)])

    db[COLLECTIONS["opportunities"]].create_index("user_id")
    db[COLLECTIONS["opportunities"]].create_index([
        ("approval_status", ASCENDING),
        ("status", ASCENDING),
        ("created_at", DESCENDING),
    ])

    # One application / interest per user per opportunity
    for name in ("applications", "interests"):
        db[COLLECTIONS[name]].create_index([
            ("user_id", ASCENDING),
            ("opportunity_id", ASCENDING),
        ], unique=True)
        db[COLLECTIONS[name]].create_index("opportunity_id")

    for name in ("leaders", "gallery_images", "videos"):
        db[COLLECTIONS[name]].create_index("order")

    logger.info("MongoDB indexes created")
