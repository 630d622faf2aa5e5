"""
Backend selection.

The backend is chosen once when the application starts.  The SQLite
backend is preferred; if the database is disabled in the settings or
cannot be opened and migrated, the seeded in‑memory store is used for
the lifetime of the process.
"""

import logging
from typing import Optional

from ..core.config import Settings, settings as default_settings
from ..core.db import get_database_path
from ..core.exceptions import BackendUnavailableError
from .base import StorageBackend
from .memory_backend import MemoryBackend
from .sqlite_backend import SQLiteBackend


logger = logging.getLogger(__name__)


def create_backend(config: Optional[Settings] = None) -> StorageBackend:
    """Return the storage backend to use for this process."""
    config = config or default_settings
    if not config.use_database:
        logger.info("Database disabled by configuration; using in-memory store")
        return MemoryBackend()

    backend = SQLiteBackend(get_database_path(config.database_url))
    try:
        version = backend.migrate()
    except (BackendUnavailableError, OSError) as exc:
        logger.warning("Failed to initialize database: %s", exc)
        logger.info("Running without database; using in-memory store")
        return MemoryBackend()
    logger.info("Database %s ready at schema version %s", backend.db_path, version)
    return backend
