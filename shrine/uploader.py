"""Uploader: uploads IO objects to a storage and builds UploadedFile instances."""

from __future__ import annotations

import logging
import ntpath
import os
import uuid
from typing import Any, BinaryIO, Callable, Mapping, Optional

from shrine.errors import StorageNotFoundError
from shrine.storage import Storage
from shrine.uploaded_file import UploadedFile

logger = logging.getLogger(__name__)

DimensionsAnalyzer = Callable[[BinaryIO], Optional[tuple[int, int]]]


def _sanitize_filename(filename: str) -> str:
    """Remove path components from filename, returning just the basename.

    Strips trailing separators first to handle path-only inputs like "/" or "dir/".
    """
    stripped = filename.rstrip("/\\")
    return os.path.basename(ntpath.basename(stripped))


def extract_filename(io: BinaryIO) -> Optional[str]:
    """Return the original filename of io, if it carries one."""
    filename = getattr(io, "original_filename", None)
    if filename is None:
        name = getattr(io, "name", None)
        filename = name if isinstance(name, str) else None
    if filename is None:
        return None
    return _sanitize_filename(filename) or None


def extract_size(io: BinaryIO) -> Optional[int]:
    """Return the size of io in bytes, preserving its position."""
    size = getattr(io, "size", None)
    if size is not None:
        return int(size)
    if not io.seekable():
        return None
    position = io.tell()
    size = io.seek(0, os.SEEK_END)
    io.seek(position)
    return size


def extract_mime_type(io: BinaryIO) -> Optional[str]:
    """Return the MIME type io declares. Content is never inspected."""
    return getattr(io, "content_type", None)


def _rewind(io: BinaryIO) -> None:
    if io.seekable():
        io.seek(0)


class Uploader:
    """Uploads files to one storage from a registry of storages.

    Args:
        storage_key: Name of the storage files are uploaded to.
        storages: Registry of all storages uploaded files may reference.
        dimensions_analyzer: Callable returning ``(width, height)`` for an IO,
            or None when they can't be determined. When given, uploaded files
            support width/height validation.

    Raises:
        StorageNotFoundError: If storage_key isn't in storages.

    Example:
        >>> uploader = Uploader("store", {"store": MemoryStorage()})
        >>> uploaded_file = uploader.upload(io.BytesIO(b"content"))
        >>> uploaded_file.size
        7
    """

    def __init__(
        self,
        storage_key: str,
        storages: Mapping[str, Storage],
        dimensions_analyzer: Optional[DimensionsAnalyzer] = None,
    ):
        if storage_key not in storages:
            raise StorageNotFoundError(storage_key)
        self.storage_key = storage_key
        self.storages = storages
        self.dimensions_analyzer = dimensions_analyzer

    @property
    def storage(self) -> Storage:
        return self.storages[self.storage_key]

    @property
    def dimensions_supported(self) -> bool:
        return self.dimensions_analyzer is not None

    def for_storage(self, storage_key: str) -> "Uploader":
        """Return an uploader for another storage of the same registry."""
        if storage_key == self.storage_key:
            return self
        return type(self)(storage_key, self.storages, self.dimensions_analyzer)

    def upload(
        self,
        io: BinaryIO,
        location: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
        **options: Any,
    ) -> UploadedFile:
        """Upload io to the storage and return the resulting UploadedFile.

        Args:
            io: File-like object to upload.
            location: Storage id to upload to, generated when omitted.
            metadata: Metadata overriding the extracted values.
            **options: Forwarded to the storage's upload.

        Returns:
            The uploaded file.
        """
        extracted = self.extract_metadata(io)
        if metadata:
            extracted.update(metadata)

        if location is None:
            location = self.generate_location(extracted)

        self.storage.upload(io, location, **options)
        logger.debug("Uploaded '%s' to storage '%s'", location, self.storage_key)
        return self.uploaded_file(
            {"id": location, "storage": self.storage_key, "metadata": extracted}
        )

    def extract_metadata(self, io: BinaryIO) -> dict[str, Any]:
        """Extract filename, size, MIME type and, if supported, dimensions.

        The io is rewound afterwards.
        """
        metadata: dict[str, Any] = {
            "filename": extract_filename(io),
            "size": extract_size(io),
            "mime_type": extract_mime_type(io),
        }
        if self.dimensions_analyzer is not None:
            dimensions = self.dimensions_analyzer(io)
            width, height = dimensions if dimensions is not None else (None, None)
            metadata["width"] = width
            metadata["height"] = height
        _rewind(io)
        return metadata

    def generate_location(self, metadata: Mapping[str, Any]) -> str:
        """Generate a unique storage id keeping the original extension."""
        filename = metadata.get("filename") or ""
        extension = os.path.splitext(filename)[1].lower()
        return uuid.uuid4().hex + extension

    def uploaded_file(self, data: Mapping[str, Any]) -> UploadedFile:
        """Build an UploadedFile bound to this uploader's storages."""
        return UploadedFile(data, self)
