"""Validation error messages.

Every check kind has a built-in default message. A ``MessageTable`` starts
from these defaults and accepts additive overrides: keys missing from an
override keep their previous message.

A message is either a literal string or a callable receiving the check's
bound (the maximum, minimum or allow/deny list) and returning a string.

Example:
    >>> table = MessageTable({"max_size": lambda maximum: "is too big"})
    >>> resolve_message("max_size", None, 1024, table)
    'is too big'
"""

from __future__ import annotations

import threading
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Union

from shrine.errors import UnknownCheckKindError
from shrine.filesize import pretty_filesize

Message = Union[str, Callable[[Any], str]]


class CheckKind(str, Enum):
    """Names of the checks that produce error messages."""

    MAX_SIZE = "max_size"
    MIN_SIZE = "min_size"
    MAX_WIDTH = "max_width"
    MIN_WIDTH = "min_width"
    MAX_HEIGHT = "max_height"
    MIN_HEIGHT = "min_height"
    MIME_TYPE_INCLUSION = "mime_type_inclusion"
    MIME_TYPE_EXCLUSION = "mime_type_exclusion"
    EXTENSION_INCLUSION = "extension_inclusion"
    EXTENSION_EXCLUSION = "extension_exclusion"


def _join(values: Any) -> str:
    return ", ".join(str(value) for value in values)


DEFAULT_MESSAGES: Mapping[CheckKind, Message] = MappingProxyType(
    {
        CheckKind.MAX_SIZE: lambda maximum: (
            f"size must not be greater than {pretty_filesize(maximum)}"
        ),
        CheckKind.MIN_SIZE: lambda minimum: (
            f"size must not be less than {pretty_filesize(minimum)}"
        ),
        CheckKind.MAX_WIDTH: lambda maximum: f"width must not be greater than {maximum}px",
        CheckKind.MIN_WIDTH: lambda minimum: f"width must not be less than {minimum}px",
        CheckKind.MAX_HEIGHT: lambda maximum: f"height must not be greater than {maximum}px",
        CheckKind.MIN_HEIGHT: lambda minimum: f"height must not be less than {minimum}px",
        CheckKind.MIME_TYPE_INCLUSION: lambda values: f"type must be one of: {_join(values)}",
        CheckKind.MIME_TYPE_EXCLUSION: lambda values: f"type must not be one of: {_join(values)}",
        CheckKind.EXTENSION_INCLUSION: lambda values: (
            f"extension must be one of: {_join(values)}"
        ),
        CheckKind.EXTENSION_EXCLUSION: lambda values: (
            f"extension must not be one of: {_join(values)}"
        ),
    }
)


def check_kind(kind: Union[CheckKind, str]) -> CheckKind:
    """Coerce a check kind name into a CheckKind.

    Raises:
        UnknownCheckKindError: If the name is not a known check kind.
    """
    try:
        return CheckKind(kind)
    except ValueError:
        raise UnknownCheckKindError(kind) from None


def _validate_message(kind: CheckKind, message: object) -> Message:
    if isinstance(message, str) or callable(message):
        return message  # type: ignore[return-value]
    raise TypeError(
        f"Message for '{kind.value}' must be a string or a callable, "
        f"got {type(message).__name__}"
    )


class MessageTable:
    """Default messages per check kind, merged additively with overrides.

    Merges are copy-on-write under a lock; lookups read the current snapshot
    without locking, so a lookup never observes a half-applied merge.
    """

    def __init__(self, overrides: Optional[Mapping[Union[CheckKind, str], Message]] = None):
        self._lock = threading.Lock()
        self._messages: Mapping[CheckKind, Message] = MappingProxyType(dict(DEFAULT_MESSAGES))
        if overrides:
            self.merge(overrides)

    def merge(self, overrides: Mapping[Union[CheckKind, str], Message]) -> None:
        """Override messages for the given kinds, keeping all other entries.

        Raises:
            UnknownCheckKindError: If a key is not a known check kind.
            TypeError: If a message is neither a string nor a callable.
        """
        normalized: dict[CheckKind, Message] = {}
        for key, message in overrides.items():
            kind = check_kind(key)
            normalized[kind] = _validate_message(kind, message)

        with self._lock:
            merged = dict(self._messages)
            merged.update(normalized)
            self._messages = MappingProxyType(merged)

    def lookup(self, kind: Union[CheckKind, str]) -> Message:
        """Return the message registered for a kind.

        Raises:
            UnknownCheckKindError: If the kind has no message.
        """
        messages = self._messages
        try:
            return messages[check_kind(kind)]
        except KeyError:
            raise UnknownCheckKindError(kind) from None

    def snapshot(self) -> Mapping[CheckKind, Message]:
        """Return a read-only view of the current messages."""
        return self._messages

    def __getitem__(self, kind: Union[CheckKind, str]) -> Message:
        return self.lookup(kind)

    def __contains__(self, kind: object) -> bool:
        try:
            return check_kind(kind) in self._messages  # type: ignore[arg-type]
        except UnknownCheckKindError:
            return False


def resolve_message(
    kind: Union[CheckKind, str],
    message: Optional[Message],
    bound: Any,
    table: MessageTable,
) -> str:
    """Resolve the error message for a failed check.

    An explicit message wins over the table default. Literal strings are used
    verbatim; callables are invoked with the check's bound.

    Args:
        kind: The check kind, used to look up the default message.
        message: Explicit message passed to the predicate, if any.
        bound: The maximum, minimum or list the check compared against.
        table: Message table holding the defaults.

    Returns:
        The error message.

    Raises:
        UnknownCheckKindError: If no explicit message is given and the kind
            has no default.
    """
    if message is None:
        message = table.lookup(kind)
    if isinstance(message, str):
        return message
    return message(bound)
