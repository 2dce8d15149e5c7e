"""Result type returned by validation predicates."""

from __future__ import annotations

from enum import Enum


class ValidationOutcome(Enum):
    """Outcome of a single validation predicate.

    Values:
        PASSED: The value satisfied the bound, no error was added.
        FAILED: The value violated the bound, exactly one error was added.
        SKIPPED: The check did not run (e.g. width is unknown), no error was added.

    Only PASSED is truthy.
    """

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"

    def __bool__(self) -> bool:
        return self is ValidationOutcome.PASSED

    @property
    def passed(self) -> bool:
        return self is ValidationOutcome.PASSED

    @property
    def failed(self) -> bool:
        return self is ValidationOutcome.FAILED

    @property
    def skipped(self) -> bool:
        return self is ValidationOutcome.SKIPPED

    @classmethod
    def from_bool(cls, passed: bool) -> "ValidationOutcome":
        return cls.PASSED if passed else cls.FAILED
