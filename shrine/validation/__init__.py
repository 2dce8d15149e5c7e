"""Validation helpers for uploaded files.

Size, dimension, MIME type and extension checks that collect human readable
error messages instead of raising.

Example:
    >>> from shrine.validation import ValidationEngine
    >>> engine = ValidationEngine()
    >>> context = engine.validate(uploaded_file, lambda v: v.validate_max_size(5 * 1024 * 1024))
    >>> context.valid
    True
"""

from shrine.validation.messages import (
    DEFAULT_MESSAGES,
    CheckKind,
    Message,
    MessageTable,
    resolve_message,
)
from shrine.validation.outcome import ValidationOutcome
from shrine.validation.context import ValidationContext
from shrine.validation.engine import ValidationEngine, ValidationRule

__all__ = [
    "CheckKind",
    "DEFAULT_MESSAGES",
    "Message",
    "MessageTable",
    "ValidationContext",
    "ValidationEngine",
    "ValidationOutcome",
    "ValidationRule",
    "resolve_message",
]
