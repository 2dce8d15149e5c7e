"""File attachment toolkit.

This package provides the UploadedFile abstraction over storage backends and
validation helpers constraining size, dimensions, MIME type and extension of
uploads before they are persisted.

Example:
    >>> from shrine import MemoryStorage, Uploader, ValidationEngine
    >>> uploader = Uploader("store", {"store": MemoryStorage()})
    >>> uploaded_file = uploader.upload(upload_io)
    >>> context = ValidationEngine().validate(
    ...     uploaded_file,
    ...     lambda v: v.validate_max_size(5 * 1024 * 1024),
    ...     lambda v: v.validate_mime_type_inclusion(["image/jpeg", "image/png"]),
    ... )
    >>> context.errors
    ()
"""

from shrine.config import ValidationConfig
from shrine.errors import (
    ConfigurationError,
    DimensionsNotSupportedError,
    FileNotFound,
    InvalidFileDataError,
    ShrineError,
    StorageNotFoundError,
    UnknownCheckKindError,
)
from shrine.filesize import FILESIZE_UNITS, pretty_filesize
from shrine.storage import MemoryStorage, Storage
from shrine.uploaded_file import UploadedFile
from shrine.uploader import Uploader
from shrine.validation import (
    CheckKind,
    MessageTable,
    ValidationContext,
    ValidationEngine,
    ValidationOutcome,
)

__all__ = [
    "CheckKind",
    "ConfigurationError",
    "DimensionsNotSupportedError",
    "FILESIZE_UNITS",
    "FileNotFound",
    "InvalidFileDataError",
    "MemoryStorage",
    "MessageTable",
    "ShrineError",
    "Storage",
    "StorageNotFoundError",
    "UnknownCheckKindError",
    "UploadedFile",
    "Uploader",
    "ValidationConfig",
    "ValidationContext",
    "ValidationEngine",
    "ValidationOutcome",
    "pretty_filesize",
]
