"""
Database module - SQL and MongoDB connections.
"""
from member_network.db.sql import create_db_engine, session_scope, test_sql_connection
from member_network.db.mongodb import get_mongo_db, test_mongo_connection

__all__ = [
    "create_db_engine",
    "session_scope",
    "test_sql_connection",
    "get_mongo_db",
    "test_mongo_connection"
]
