"""Exception hierarchy for shrine.

Validation failures are never raised; they are collected as messages on a
``ValidationContext``. The exceptions below signal programming or setup
errors that must not be silently skipped.
"""

from __future__ import annotations


class ShrineError(Exception):
    """Base class for all shrine errors."""

    pass


class InvalidFileDataError(ShrineError, ValueError):
    """Raised when uploaded file data is missing its id or storage key."""

    @classmethod
    def for_data(cls, data: object) -> "InvalidFileDataError":
        """Create an InvalidFileDataError describing the rejected data."""
        return cls(f"{data!r} isn't valid uploaded file data")


class StorageNotFoundError(ShrineError, KeyError):
    """Raised when an uploaded file references an unregistered storage."""

    def __init__(self, storage_key: str) -> None:
        self.storage_key = storage_key
        super().__init__(f"storage {storage_key!r} isn't registered")

    def __str__(self) -> str:
        return self.args[0]


class FileNotFound(ShrineError, FileNotFoundError):
    """Raised when a storage is asked to open a file it does not hold."""

    @classmethod
    def for_id(cls, id: str) -> "FileNotFound":
        """Create a FileNotFound error for the given storage id."""
        return cls(f"file {id!r} not found on storage")


class ConfigurationError(ShrineError):
    """Raised when a feature is used without the setup it depends on."""

    pass


class DimensionsNotSupportedError(ConfigurationError):
    """Raised when a width/height check runs on a file without dimensions."""

    @classmethod
    def for_check(cls, check: str) -> "DimensionsNotSupportedError":
        """Create a DimensionsNotSupportedError for the given check name."""
        return cls(
            f"Cannot run '{check}': the uploaded file does not support dimensions. "
            f"Configure the uploader with a dimensions_analyzer to store width and height."
        )


class UnknownCheckKindError(ShrineError, KeyError):
    """Raised when a message is requested for a check kind with no default."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"no default validation message for check kind {kind!r}")

    def __str__(self) -> str:
        return self.args[0]
