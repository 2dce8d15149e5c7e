"""In-memory storage implementation."""

import io as _io
import logging
from typing import Any, BinaryIO, Optional

from shrine.errors import FileNotFound
from shrine.storage.base import Storage

logger = logging.getLogger(__name__)


class MemoryStorage(Storage):
    """Storage keeping file contents in a dictionary.

    Useful in tests and for caching small uploads within a single process.
    Nothing is persisted.
    """

    def __init__(self, store: Optional[dict[str, bytes]] = None):
        """Initialize memory storage, optionally with pre-existing contents."""
        self.store: dict[str, bytes] = store if store is not None else {}

    def upload(self, io: BinaryIO, id: str, **options: Any) -> None:
        content = io.read()
        if isinstance(content, str):
            content = content.encode()
        self.store[id] = content
        logger.debug("Stored %d bytes under '%s' in memory", len(content), id)

    def open(self, id: str, **options: Any) -> BinaryIO:
        try:
            return _io.BytesIO(self.store[id])
        except KeyError:
            raise FileNotFound.for_id(id) from None

    def exists(self, id: str) -> bool:
        return id in self.store

    def url(self, id: str, **options: Any) -> str:
        return f"memory://{id}"

    def delete(self, id: str) -> None:
        if self.store.pop(id, None) is not None:
            logger.debug("Deleted '%s' from memory", id)

    def clear(self) -> None:
        """Remove all stored files."""
        self.store.clear()
