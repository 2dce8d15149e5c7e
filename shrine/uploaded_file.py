"""Uploaded file abstraction over storage backends."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from typing import IO, TYPE_CHECKING, Any, BinaryIO, Mapping, Optional
from urllib.parse import urlsplit

from shrine.errors import InvalidFileDataError, StorageNotFoundError

if TYPE_CHECKING:
    from shrine.storage import Storage
    from shrine.uploader import Uploader

logger = logging.getLogger(__name__)


def _extname(path: str) -> Optional[str]:
    """Return the extension of path without the leading dot, or None."""
    extension = os.path.splitext(path)[1][1:]
    return extension or None


def _strip_url_query(id: str) -> str:
    """Drop the query string from URL ids, leaving other ids untouched."""
    parsed = urlsplit(id)
    if parsed.scheme and parsed.netloc:
        return parsed.path
    return id


def _to_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


class UploadedFile:
    """A file uploaded to one of the uploader's storages.

    Wraps the ``{"id", "storage", "metadata"}`` data describing the upload and
    delegates IO to the storage. The underlying IO is opened lazily on the
    first read.

    Attributes:
        id: Location of the file on its storage.
        storage_key: Name under which the storage is registered.
        metadata: Extracted metadata (``size``, ``filename``, ``mime_type``,
            and ``width``/``height`` when dimensions are stored).
        uploader: The uploader holding the storage registry.

    Raises:
        InvalidFileDataError: If the data lacks an id or a storage key.
        StorageNotFoundError: If the storage key isn't registered.

    Example:
        >>> uploaded_file = uploader.upload(io.BytesIO(b"content"))
        >>> with uploaded_file:
        ...     uploaded_file.read()
        b'content'
    """

    def __init__(self, data: Mapping[str, Any], uploader: "Uploader"):
        file_id = data.get("id")
        storage_key = data.get("storage")
        if file_id is None or storage_key is None:
            raise InvalidFileDataError.for_data(data)

        storage_key = str(storage_key)
        if storage_key not in uploader.storages:
            raise StorageNotFoundError(storage_key)

        self.id: str = str(file_id)
        self.storage_key: str = storage_key
        self.metadata: dict[str, Any] = dict(data.get("metadata") or {})
        self.uploader = uploader
        self._io: Optional[BinaryIO] = None

    @property
    def storage(self) -> "Storage":
        return self.uploader.storages[self.storage_key]

    # -- Metadata -------------------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        return self.metadata.get(key)

    @property
    def original_filename(self) -> Optional[str]:
        return self.metadata.get("filename")

    @property
    def extension(self) -> Optional[str]:
        """Lowercased file extension, taken from the id before the filename.

        Storages may change the extension on upload, so the id wins.
        """
        extension = _extname(_strip_url_query(self.id))
        if extension is None and self.original_filename:
            extension = _extname(self.original_filename)
        return extension.lower() if extension else None

    @property
    def size(self) -> Optional[int]:
        return _to_int(self.metadata.get("size"))

    @property
    def mime_type(self) -> Optional[str]:
        return self.metadata.get("mime_type")

    content_type = mime_type

    @property
    def width(self) -> Optional[int]:
        return _to_int(self.metadata.get("width"))

    @property
    def height(self) -> Optional[int]:
        return _to_int(self.metadata.get("height"))

    @property
    def dimensions_supported(self) -> bool:
        """Whether width and height are extracted for this kind of file."""
        return self.uploader.dimensions_supported

    # -- IO -------------------------------------------------------------------

    def open(self, **options: Any) -> BinaryIO:
        """Open the file on its storage, closing any previously opened IO."""
        self.close()
        self._io = self.storage.open(self.id, **options)
        logger.debug("Opened '%s' from storage '%s'", self.id, self.storage_key)
        return self._io

    @property
    def opened(self) -> bool:
        return self._io is not None and not self._io.closed

    def to_io(self) -> BinaryIO:
        """Return the underlying IO, opening it on first access."""
        if self._io is None:
            return self.open()
        return self._io

    def read(self, size: int = -1) -> bytes:
        return self.to_io().read(size)

    def eof(self) -> bool:
        io = self.to_io()
        position = io.tell()
        at_end = not io.read(1)
        io.seek(position)
        return at_end

    def rewind(self) -> None:
        self.to_io().seek(0)

    def close(self) -> None:
        """Close the underlying IO if it was opened, without opening it."""
        if self._io is not None:
            self._io.close()
            self._io = None

    def __enter__(self) -> "UploadedFile":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def stream(self, destination: IO[bytes], **options: Any) -> None:
        """Copy file content into destination.

        An already opened file is rewound before and after copying and stays
        open; otherwise the file is opened for the copy and closed afterwards.
        """
        if self.opened:
            self.rewind()
            shutil.copyfileobj(self.to_io(), destination)
            self.rewind()
            return

        io = self.open(**options)
        try:
            shutil.copyfileobj(io, destination)
        finally:
            self.close()

    def download(self, **options: Any) -> IO[bytes]:
        """Download file content into a named temporary file.

        The temporary file carries the file's extension, is rewound, and is
        deleted when closed, so it can be used as a context manager.
        """
        suffix = f".{self.extension}" if self.extension else ""
        destination = tempfile.NamedTemporaryFile(prefix="shrine", suffix=suffix)
        try:
            self.stream(destination, **options)
            destination.seek(0)
        except BaseException:
            destination.close()
            raise
        return destination

    # -- Storage --------------------------------------------------------------

    def url(self, **options: Any) -> str:
        return self.storage.url(self.id, **options)

    def exists(self) -> bool:
        return self.storage.exists(self.id)

    def delete(self) -> None:
        self.storage.delete(self.id)
        logger.debug("Deleted '%s' from storage '%s'", self.id, self.storage_key)

    def replace(self, io: BinaryIO, **options: Any) -> "UploadedFile":
        """Upload another file to the same location on the same storage."""
        uploader = self.uploader.for_storage(self.storage_key)
        return uploader.upload(io, location=self.id, **options)

    # -- Serialization --------------------------------------------------------

    @property
    def data(self) -> dict[str, Any]:
        return {"id": self.id, "storage": self.storage_key, "metadata": dict(self.metadata)}

    def to_json(self) -> str:
        return json.dumps(self.data, separators=(",", ":"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UploadedFile):
            return NotImplemented
        return self.id == other.id and self.storage_key == other.storage_key

    def __hash__(self) -> int:
        return hash((self.id, self.storage_key))

    def __repr__(self) -> str:
        return (
            f"<{type(self).__name__} storage={self.storage_key!r} "
            f"id={self.id!r} metadata={self.metadata!r}>"
        )
