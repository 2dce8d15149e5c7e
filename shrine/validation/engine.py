"""Validation engine owning the default message table."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional, Union

from shrine.validation.context import ValidationContext
from shrine.validation.messages import CheckKind, Message, MessageTable

if TYPE_CHECKING:
    from shrine.config import ValidationConfig
    from shrine.uploaded_file import UploadedFile

logger = logging.getLogger(__name__)

ValidationRule = Callable[[ValidationContext], Any]


class ValidationEngine:
    """Runs validation passes over uploaded files.

    Each engine owns its message table, built from the built-in messages plus
    the given overrides, so independently configured engines can coexist.

    Args:
        default_messages: Overrides for the built-in messages, keyed by check kind.
        skip_missing_dimensions: Whether width/height checks are skipped when
            the dimension is unknown.

    Example:
        >>> engine = ValidationEngine(default_messages={"max_size": "is too big"})
        >>> context = engine.validate(
        ...     uploaded_file,
        ...     lambda v: v.validate_max_size(1024),
        ...     lambda v: v.validate_extension_inclusion(["jpg", "png"]),
        ... )
        >>> context.errors
        ('is too big',)
    """

    def __init__(
        self,
        default_messages: Optional[Mapping[Union[CheckKind, str], Message]] = None,
        skip_missing_dimensions: bool = True,
    ):
        self.messages = MessageTable(default_messages)
        self.skip_missing_dimensions = skip_missing_dimensions

    @classmethod
    def from_config(cls, config: "ValidationConfig") -> "ValidationEngine":
        """Create an engine from a validated configuration."""
        return cls(
            default_messages=config.default_messages,
            skip_missing_dimensions=config.skip_missing_dimensions,
        )

    def configure(self, default_messages: Mapping[Union[CheckKind, str], Message]) -> None:
        """Merge message overrides into this engine's defaults.

        Repeated calls are additive: kinds not mentioned keep their message.
        Intended for application setup, before validation passes run.
        """
        self.messages.merge(default_messages)

    def context(self, file: "UploadedFile") -> ValidationContext:
        """Create a fresh validation context for one pass over file."""
        return ValidationContext(
            file, self.messages, skip_missing_dimensions=self.skip_missing_dimensions
        )

    def validate(self, file: "UploadedFile", *rules: ValidationRule) -> ValidationContext:
        """Run the rules against file in a fresh context and return it.

        Args:
            file: The uploaded file to validate.
            *rules: Callables receiving the context, typically calling its
                ``validate_*`` predicates.

        Returns:
            The context, holding the collected errors.
        """
        context = self.context(file)
        for rule in rules:
            rule(context)
        if context.errors:
            logger.debug("'%s' failed validation: %s", file.id, "; ".join(context.errors))
        return context
