"""Exception hierarchy for railyard."""

from __future__ import annotations

from dataclasses import dataclass


class RailyardError(Exception):
    """Base exception for all railyard errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(RailyardError):
    """Configuration validation or resolution failed."""


class UnwrapError(RailyardError):
    """The wrong side of an outcome was read.

    Reading ``.value`` on a failure or ``.error`` on a success is a
    programming error, never a recoverable condition.
    """


class InvariantViolationError(RailyardError):
    """Raised when an internal pipeline invariant is violated.

    Used to signal impossible states that indicate a bug or mis-composed
    pipeline, e.g. a step that returns something other than an outcome.
    """

    def __init__(
        self, message: str, *, stage_name: str | None = None, hint: str | None = None
    ) -> None:
        self.stage_name = stage_name
        msg = message if stage_name is None else f"[{stage_name}] {message}"
        super().__init__(msg, hint=hint)


@dataclass(frozen=True, slots=True)
class StepFault:
    """Error value for a fault raised inside a step body.

    Produced by :func:`railyard.outcome.wrap_fault`. It is a plain value, not an
    exception, so it travels down the failure track like any domain error.
    """

    message: str
    cause: Exception

    def __str__(self) -> str:
        return self.message
