"""Database module for the registry store."""

from ca_registry.db.database import (
    Base,
    create_schema,
    dispose_engine,
    get_engine,
    make_engine,
    verify_database_connection,
)
from ca_registry.db.models import GroupRecord, UserRecord

__all__ = [
    "Base",
    "create_schema",
    "dispose_engine",
    "get_engine",
    "make_engine",
    "verify_database_connection",
    "GroupRecord",
    "UserRecord",
]
