"""Abstract interface for file storage backends."""

from abc import ABC, abstractmethod
from typing import Any, BinaryIO


class Storage(ABC):
    """Abstract base class for file storage backends.

    Uploaded files delegate all IO to the storage they were uploaded to, so
    a backend only needs to know how to move bytes by id.
    """

    @abstractmethod
    def upload(self, io: BinaryIO, id: str, **options: Any) -> None:
        """
        Uploads a file to storage.

        Args:
            io: File-like object containing the data.
            id: The destination location in storage.
            **options: Backend specific upload options.
        """

    @abstractmethod
    def open(self, id: str, **options: Any) -> BinaryIO:
        """
        Opens a stored file for reading.

        Args:
            id: The location of the file in storage.
            **options: Backend specific options.

        Returns:
            A readable, seekable file-like object.

        Raises:
            FileNotFound: If no file is stored under the id.
        """

    @abstractmethod
    def exists(self, id: str) -> bool:
        """Returns whether a file is stored under the id."""

    @abstractmethod
    def url(self, id: str, **options: Any) -> str:
        """Returns the URL under which the file can be accessed."""

    @abstractmethod
    def delete(self, id: str) -> None:
        """Deletes the file, doing nothing if it doesn't exist."""
