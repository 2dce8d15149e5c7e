"""Storage backends for uploaded files."""

from shrine.storage.base import Storage
from shrine.storage.memory import MemoryStorage

__all__ = ["Storage", "MemoryStorage"]
