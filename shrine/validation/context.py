"""Validation predicates for uploaded files.

A ``ValidationContext`` is created for one validation pass over one uploaded
file. Each predicate compares a single metadata field against a bound and
either passes, or fails and appends exactly one error message.

Example:
    >>> context = ValidationContext(uploaded_file, MessageTable())
    >>> context.validate_max_size(1024 * 1024)
    <ValidationOutcome.FAILED: 'failed'>
    >>> context.errors
    ('size must not be greater than 1.0 MB',)
"""

from __future__ import annotations

import logging
import re
import warnings
from typing import TYPE_CHECKING, Any, Callable, Iterable, Optional, Union

import deprecation

from shrine.errors import DimensionsNotSupportedError
from shrine.validation.messages import CheckKind, Message, MessageTable, resolve_message
from shrine.validation.outcome import ValidationOutcome

if TYPE_CHECKING:
    from shrine.uploaded_file import UploadedFile

logger = logging.getLogger(__name__)

Bounds = Union[range, tuple[Any, Any], list[Any]]

_ALIAS_DEPRECATED_IN = "1.0.0"
_ALIAS_REMOVED_IN = "2.0.0"
_CURRENT_VERSION = "1.0.0"

_MISSING_DIMENSION_MSG = (
    "{dimension} of the uploaded file is unknown, and the validation was skipped. "
    "Skipping will be removed in version 2.0.0; the validation will then fail. "
    "Set skip_missing_dimensions=False to opt in now."
)


def _range_bounds(bounds: Bounds) -> tuple[Any, Any]:
    """Return inclusive ``(minimum, maximum)`` from a pair or a step-1 range."""
    if isinstance(bounds, range):
        if bounds.step != 1:
            raise ValueError(f"Range bounds must have a step of 1, got {bounds!r}")
        return bounds.start, bounds.stop - 1
    minimum, maximum = bounds
    return minimum, maximum


def _size_bound(kind: CheckKind, bound: int) -> int:
    if bound < 0:
        raise ValueError(f"'{kind.value}' bound cannot be negative: {bound}")
    return bound


def _string_list(kind: CheckKind, values: Iterable[Any]) -> list[str]:
    """Validate an allow/deny list, accepting plain strings only."""
    if isinstance(values, (str, bytes)):
        raise TypeError(f"'{kind.value}' expects a list of strings, not a single string")
    result = []
    for value in values:
        if isinstance(value, re.Pattern):
            raise TypeError(
                f"Regex patterns are not supported in '{kind.value}' lists, "
                f"got {value.pattern!r}. Use plain strings instead."
            )
        if not isinstance(value, str):
            raise TypeError(f"'{kind.value}' lists must contain strings, got {value!r}")
        result.append(value)
    return result


def _matches_any(value: Optional[str], candidates: list[str]) -> bool:
    """Case-insensitive whole-string match of value against candidates."""
    if value is None:
        return False
    folded = value.lower()
    return any(folded == candidate.lower() for candidate in candidates)


class ValidationContext:
    """Error accumulator and validation predicates for one uploaded file.

    Args:
        file: The uploaded file under validation.
        messages: Table of default error messages.
        skip_missing_dimensions: Whether width/height checks are skipped
            (instead of failing) when the dimension is unknown.
    """

    def __init__(
        self,
        file: "UploadedFile",
        messages: MessageTable,
        skip_missing_dimensions: bool = True,
    ):
        self.file = file
        self.messages = messages
        self.skip_missing_dimensions = skip_missing_dimensions
        self._errors: list[str] = []

    @property
    def errors(self) -> tuple[str, ...]:
        """Error messages added so far, in order."""
        return tuple(self._errors)

    @property
    def valid(self) -> bool:
        return not self._errors

    def add_error(self, kind: CheckKind, message: Optional[Message], bound: Any) -> None:
        """Resolve the error message for a failed check and append it."""
        error = resolve_message(kind, message, bound, self.messages)
        self._errors.append(error)
        logger.debug("Validation '%s' failed for '%s': %s", kind.value, self.file.id, error)

    def _outcome(
        self, passed: bool, kind: CheckKind, message: Optional[Message], bound: Any
    ) -> ValidationOutcome:
        if not passed:
            self.add_error(kind, message, bound)
        return ValidationOutcome.from_bool(passed)

    # -- Size -----------------------------------------------------------------

    def validate_max_size(
        self, max_size: int, message: Optional[Message] = None
    ) -> ValidationOutcome:
        """Validate that the ``size`` metadata is not larger than max_size.

        Example:
            context.validate_max_size(5 * 1024 * 1024)
        """
        max_size = _size_bound(CheckKind.MAX_SIZE, max_size)
        size = self.file.size
        return self._outcome(
            size is not None and size <= max_size, CheckKind.MAX_SIZE, message, max_size
        )

    def validate_min_size(
        self, min_size: int, message: Optional[Message] = None
    ) -> ValidationOutcome:
        """Validate that the ``size`` metadata is not smaller than min_size."""
        min_size = _size_bound(CheckKind.MIN_SIZE, min_size)
        size = self.file.size
        return self._outcome(
            size is not None and size >= min_size, CheckKind.MIN_SIZE, message, min_size
        )

    def validate_size(self, bounds: Bounds) -> ValidationOutcome:
        """Validate that the ``size`` metadata is within inclusive bounds.

        The maximum is only checked when the minimum passed, so at most one
        error is added.

        Example:
            context.validate_size((1024, 5 * 1024 * 1024))
        """
        minimum, maximum = _range_bounds(bounds)
        outcome = self.validate_min_size(minimum)
        if not outcome.passed:
            return outcome
        return self.validate_max_size(maximum)

    # -- Dimensions -----------------------------------------------------------

    def _validate_dimension(
        self,
        kind: CheckKind,
        dimension: str,
        value: Optional[int],
        bound: int,
        satisfied: Callable[[int], bool],
        message: Optional[Message],
    ) -> ValidationOutcome:
        if not self.file.dimensions_supported:
            raise DimensionsNotSupportedError.for_check(f"validate_{kind.value}")

        if value is None:
            if self.skip_missing_dimensions:
                warnings.warn(
                    _MISSING_DIMENSION_MSG.format(dimension=dimension.capitalize()),
                    DeprecationWarning,
                    stacklevel=3,
                )
                logger.warning(
                    "Skipped '%s' for '%s': %s is unknown", kind.value, self.file.id, dimension
                )
                return ValidationOutcome.SKIPPED
            return self._outcome(False, kind, message, bound)

        return self._outcome(satisfied(value), kind, message, bound)

    def validate_max_width(
        self, max_width: int, message: Optional[Message] = None
    ) -> ValidationOutcome:
        """Validate that the ``width`` metadata is not larger than max_width.

        Raises:
            DimensionsNotSupportedError: If the file doesn't store dimensions.
        """
        return self._validate_dimension(
            CheckKind.MAX_WIDTH,
            "width",
            self.file.width,
            max_width,
            lambda width: width <= max_width,
            message,
        )

    def validate_min_width(
        self, min_width: int, message: Optional[Message] = None
    ) -> ValidationOutcome:
        """Validate that the ``width`` metadata is not smaller than min_width.

        Raises:
            DimensionsNotSupportedError: If the file doesn't store dimensions.
        """
        return self._validate_dimension(
            CheckKind.MIN_WIDTH,
            "width",
            self.file.width,
            min_width,
            lambda width: width >= min_width,
            message,
        )

    def validate_width(self, bounds: Bounds) -> ValidationOutcome:
        """Validate that the ``width`` metadata is within inclusive bounds."""
        minimum, maximum = _range_bounds(bounds)
        outcome = self.validate_min_width(minimum)
        if not outcome.passed:
            return outcome
        return self.validate_max_width(maximum)

    def validate_max_height(
        self, max_height: int, message: Optional[Message] = None
    ) -> ValidationOutcome:
        """Validate that the ``height`` metadata is not larger than max_height.

        Raises:
            DimensionsNotSupportedError: If the file doesn't store dimensions.
        """
        return self._validate_dimension(
            CheckKind.MAX_HEIGHT,
            "height",
            self.file.height,
            max_height,
            lambda height: height <= max_height,
            message,
        )

    def validate_min_height(
        self, min_height: int, message: Optional[Message] = None
    ) -> ValidationOutcome:
        """Validate that the ``height`` metadata is not smaller than min_height.

        Raises:
            DimensionsNotSupportedError: If the file doesn't store dimensions.
        """
        return self._validate_dimension(
            CheckKind.MIN_HEIGHT,
            "height",
            self.file.height,
            min_height,
            lambda height: height >= min_height,
            message,
        )

    def validate_height(self, bounds: Bounds) -> ValidationOutcome:
        """Validate that the ``height`` metadata is within inclusive bounds."""
        minimum, maximum = _range_bounds(bounds)
        outcome = self.validate_min_height(minimum)
        if not outcome.passed:
            return outcome
        return self.validate_max_height(maximum)

    # -- MIME type and extension ----------------------------------------------

    def _validate_inclusion(
        self, kind: CheckKind, value: Optional[str], allowed: Any, message: Optional[Message]
    ) -> ValidationOutcome:
        allowed = _string_list(kind, allowed)
        return self._outcome(_matches_any(value, allowed), kind, message, allowed)

    def _validate_exclusion(
        self, kind: CheckKind, value: Optional[str], forbidden: Any, message: Optional[Message]
    ) -> ValidationOutcome:
        forbidden = _string_list(kind, forbidden)
        return self._outcome(not _matches_any(value, forbidden), kind, message, forbidden)

    def validate_mime_type_inclusion(
        self, allowed: Iterable[str], message: Optional[Message] = None
    ) -> ValidationOutcome:
        """Validate that the ``mime_type`` metadata is one of allowed.

        A missing MIME type always fails.

        Example:
            context.validate_mime_type_inclusion(["audio/mp3", "audio/flac"])
        """
        return self._validate_inclusion(
            CheckKind.MIME_TYPE_INCLUSION, self.file.mime_type, allowed, message
        )

    def validate_mime_type_exclusion(
        self, forbidden: Iterable[str], message: Optional[Message] = None
    ) -> ValidationOutcome:
        """Validate that the ``mime_type`` metadata is none of forbidden.

        A missing MIME type always passes.
        """
        return self._validate_exclusion(
            CheckKind.MIME_TYPE_EXCLUSION, self.file.mime_type, forbidden, message
        )

    def validate_extension_inclusion(
        self, allowed: Iterable[str], message: Optional[Message] = None
    ) -> ValidationOutcome:
        """Validate that the file extension is one of allowed (case insensitive).

        Example:
            context.validate_extension_inclusion(["jpg", "jpeg", "png", "gif"])
        """
        return self._validate_inclusion(
            CheckKind.EXTENSION_INCLUSION, self.file.extension, allowed, message
        )

    def validate_extension_exclusion(
        self, forbidden: Iterable[str], message: Optional[Message] = None
    ) -> ValidationOutcome:
        """Validate that the file extension is none of forbidden (case insensitive)."""
        return self._validate_exclusion(
            CheckKind.EXTENSION_EXCLUSION, self.file.extension, forbidden, message
        )

    @deprecation.deprecated(
        deprecated_in=_ALIAS_DEPRECATED_IN,
        removed_in=_ALIAS_REMOVED_IN,
        current_version=_CURRENT_VERSION,
        details="Use validate_mime_type_inclusion instead.",
    )
    def validate_mime_type(
        self, allowed: Iterable[str], message: Optional[Message] = None
    ) -> ValidationOutcome:
        return self.validate_mime_type_inclusion(allowed, message=message)

    @deprecation.deprecated(
        deprecated_in=_ALIAS_DEPRECATED_IN,
        removed_in=_ALIAS_REMOVED_IN,
        current_version=_CURRENT_VERSION,
        details="Use validate_extension_inclusion instead.",
    )
    def validate_extension(
        self, allowed: Iterable[str], message: Optional[Message] = None
    ) -> ValidationOutcome:
        return self.validate_extension_inclusion(allowed, message=message)
