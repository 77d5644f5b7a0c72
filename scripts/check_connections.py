#!/usr/bin/env python3
"""
Connection Check Script

Run this to verify the database connections are working.
Usage: python scripts/check_connections.py
"""
import sys
sys.path.insert(0, '.')

from member_network.core.config import get_settings
from member_network.db.mongodb import get_mongo_client, get_mongo_db, test_mongo_connection
from member_network.db.sql import create_db_engine, test_sql_connection


def _masked(url: str) -> str:
    """Hide the password part of a connection URL."""
    if "@" not in url or "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    credentials, host = rest.rsplit("@", 1)
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:****@{host}"


def main():
    settings = get_settings()
    ok = True
    print("=" * 50)
    print("MEMBER NETWORK - CONNECTION CHECK")
    print("=" * 50)
    print(f"\nConfigured storage backend: {settings.storage_backend}")

    # SQL
    print("\n[1] Checking SQL database...")
    print(f"    URL: {_masked(settings.sql_url)}")
    if test_sql_connection(create_db_engine(settings.sql_url)):
        print("    ✅ SQL: CONNECTED")
    else:
        print("    ❌ SQL: FAILED")
        ok = ok and settings.storage_backend != "sql"

    # MongoDB
    print("\n[2] Checking MongoDB...")
    print(f"    URI: {_masked(settings.mongodb_uri)}")
    print(f"    Database: {get_mongo_db().name}")
    if test_mongo_connection(get_mongo_client()):
        print("    ✅ MongoDB: CONNECTED")
    else:
        print("    ❌ MongoDB: FAILED")
        ok = ok and settings.storage_backend != "mongo"

    print("\n" + "=" * 50)
    print("Connection check complete!")
    print("=" * 50)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
