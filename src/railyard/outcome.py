"""Outcome type for railway-oriented error handling.

An outcome is either a ``Success`` carrying a value or a ``Failure`` carrying
an error, never both. Failures are an ordinary part of the data flow instead
of exceptions, so a chain of fallible steps reads top to bottom and the first
failure rides the failure track to the end untouched.

Both variants are frozen dataclasses and support structural pattern matching::

    match outcome:
        case Success(value):
            ...
        case Failure(error):
            ...

Faults raised inside a step body are never allowed to escape ``map`` or
``flat_map``. The caller decides how a caught exception becomes an error value
by passing an explicit ``on_fault`` converter; no common root error type is
assumed.
"""

from __future__ import annotations

import dataclasses
from typing import TYPE_CHECKING, Any, Never, TypeGuard

from railyard._stages import stage_name_of
from railyard.errors import InvariantViolationError, StepFault, UnwrapError

if TYPE_CHECKING:
    from collections.abc import Callable

type FaultHandler[E] = Callable[[Exception], E]
"""Converts a caught exception into a failure-track error value."""


@dataclasses.dataclass(frozen=True, slots=True)
class Success[T]:
    """A value on the success track."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    @property
    def error(self) -> Never:
        """Not available on a success; always raises ``UnwrapError``."""
        raise UnwrapError(
            f"Cannot read .error of a Success outcome (value={self.value!r})",
            hint="Check is_success() or pattern match before reading the error.",
        )

    def unwrap(self) -> T:
        return self.value

    def unwrap_error(self) -> Never:
        return self.error

    def map[R, E](
        self, fn: Callable[[T], R], *, on_fault: FaultHandler[E]
    ) -> Success[R] | Failure[E]:
        """Apply a total transformation to the value and stay on the success track.

        Args:
            fn: Transformation of the success value.
            on_fault: Converter applied to any exception raised by ``fn``.

        Returns:
            ``Success(fn(value))``, or ``Failure(on_fault(exc))`` if ``fn`` raised.
        """
        return attempt(fn, self.value, on_fault=on_fault)

    def flat_map[R, E](
        self, fn: Callable[[T], Success[R] | Failure[E]], *, on_fault: FaultHandler[E]
    ) -> Success[R] | Failure[E]:
        """Chain a fallible step that may change the value type.

        Args:
            fn: Step receiving the success value and returning an outcome.
            on_fault: Converter applied to any exception raised by ``fn``.

        Returns:
            Whatever outcome ``fn`` produced, or ``Failure(on_fault(exc))``.

        Raises:
            InvariantViolationError: If ``fn`` returned something that is not
                an outcome.
        """
        try:
            produced = fn(self.value)
        except Exception as exc:
            return Failure(on_fault(exc))
        if not is_outcome(produced):
            raise InvariantViolationError(
                f"Step returned {type(produced).__name__}; expected Success|Failure.",
                stage_name=stage_name_of(fn),
                hint="Wrap plain return values with success() or use map().",
            )
        return produced

    and_then = flat_map


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E]:
    """An error on the failure track.

    Every transformation is a no-op that hands back this same failure, so the
    error object reaches the end of the chain unchanged.
    """

    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    @property
    def value(self) -> Never:
        """Not available on a failure; always raises ``UnwrapError``."""
        raise UnwrapError(
            f"Cannot read .value of a Failure outcome (error={self.error!r})",
            hint="Check is_success() or pattern match before reading the value.",
        )

    def unwrap(self) -> Never:
        return self.value

    def unwrap_error(self) -> E:
        return self.error

    def map(self, fn: Callable[[Any], Any], *, on_fault: FaultHandler[E]) -> Failure[E]:
        del fn, on_fault
        return self

    def flat_map(
        self, fn: Callable[[Any], Any], *, on_fault: FaultHandler[E]
    ) -> Failure[E]:
        del fn, on_fault
        return self

    and_then = flat_map


type Outcome[T, E] = Success[T] | Failure[E]


def success[T](value: T) -> Success[T]:
    """Put ``value`` on the success track."""
    return Success(value)


def failure[E](error: E) -> Failure[E]:
    """Put ``error`` on the failure track."""
    return Failure(error)


def is_outcome(obj: object) -> TypeGuard[Success[Any] | Failure[Any]]:
    return isinstance(obj, Success | Failure)


def attempt[R, E](
    fn: Callable[..., R], /, *args: Any, on_fault: FaultHandler[E], **kwargs: Any
) -> Success[R] | Failure[E]:
    """Call ``fn`` and capture its result or its fault as an outcome.

    Only ``Exception`` subclasses are captured. ``KeyboardInterrupt`` and
    ``SystemExit`` propagate, and so does anything raised by ``on_fault``.
    """
    try:
        return Success(fn(*args, **kwargs))
    except Exception as exc:
        return Failure(on_fault(exc))


# --- Stock fault converters ---


def keep_fault(exc: Exception) -> Exception:
    """Use the caught exception itself as the error value."""
    return exc


def wrap_fault(exc: Exception) -> StepFault:
    """Wrap the caught exception in a ``StepFault`` error value."""
    return StepFault(f"{type(exc).__name__}: {exc}", cause=exc)


__all__ = [
    "Failure",
    "FaultHandler",
    "Outcome",
    "Success",
    "attempt",
    "failure",
    "is_outcome",
    "keep_fault",
    "success",
    "wrap_fault",
]
