"""
Persistence gateway.

``StorageBackend`` is the single storage contract used by the
services.  ``SQLiteBackend`` persists to a SQLite file; ``MemoryBackend``
keeps everything in process and is used when the database cannot be
opened.  ``create_backend`` picks one of them once at start‑up.
"""

from .base import StorageBackend
from .factory import create_backend
from .memory_backend import MemoryBackend
from .sqlite_backend import SQLiteBackend

__all__ = ["StorageBackend", "MemoryBackend", "SQLiteBackend", "create_backend"]
