"""Storage module."""

from .memory import MemoryStorage
from .storage import IStorage, SqliteStorage

__all__ = ["IStorage", "MemoryStorage", "SqliteStorage"]
