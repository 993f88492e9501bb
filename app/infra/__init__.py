"""Infrastructure module - Database and object storage."""

from app.infra.database import Base, close_db, db_manager, get_db, init_db
from app.infra.storage import StorageClient, StorageError

__all__ = [
    # Database
    "Base",
    "db_manager",
    "get_db",
    "init_db",
    "close_db",
    # Storage
    "StorageClient",
    "StorageError",
]
