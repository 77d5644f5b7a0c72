"""
Repositories - one Storage interface, two backends.

Usage:
    @router.get("/things")
    async def route(storage: Storage = Depends(get_storage)):
        ...
"""

import logging

from member_network.core.config import get_settings
from member_network.repositories.base import Storage

logger = logging.getLogger(__name__)

_storage: Storage = None


def build_storage(backend: str = None) -> Storage:
    """Build the storage backend named in settings (sql or mongo)."""
    settings = get_settings()
    backend = (backend or settings.storage_backend).lower()
    if backend == "sql":
        from member_network.db.sql import create_db_engine
        from member_network.repositories.sql import SqlStorage
        return SqlStorage(create_db_engine(settings.sql_url, echo=settings.debug))
    if backend == "mongo":
        from member_network.db.mongodb import get_mongo_db
        from member_network.repositories.mongo import MongoStorage
        return MongoStorage(get_mongo_db())
    raise ValueError(f"Unknown storage backend '{backend}' (expected 'sql' or 'mongo')")


def get_storage() -> Storage:
    """FastAPI dependency - the process-wide storage (singleton pattern)."""
    global _storage
    if _storage is None:
        _storage = build_storage()
        logger.info("Using %s storage", type(_storage).__name__)
    return _storage


__all__ = ["Storage", "build_storage", "get_storage"]
