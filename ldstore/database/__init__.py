"""
Database module initialization.
Exports connection management and DAO construction.
"""

from ldstore.database.connection import (
    init_db,
    close_db,
    get_active_settings,
    get_client,
    get_database,
    get_collection,
    check_db_connection,
    get_db_info,
)
from ldstore.database.dependencies import create_dao

__all__ = [
    # Connection management
    "init_db",
    "close_db",
    "get_active_settings",
    "get_client",
    "get_database",
    "get_collection",
    # DAO construction
    "create_dao",
    # Utilities
    "check_db_connection",
    "get_db_info",
]
