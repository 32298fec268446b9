"""Free-function combinators over ``Outcome``.

These are spelled as functions for callers who prefer composing steps over
chaining methods. They never touch ``Pipeline`` and add no semantics of their
own: each one defers to ``Success``/``Failure``.
"""

from __future__ import annotations

import functools
from typing import TYPE_CHECKING, Any

from railyard._stages import stage_name_of
from railyard.outcome import Failure, Success, success

if TYPE_CHECKING:
    from collections.abc import Callable

    from railyard.outcome import FaultHandler


def map_success[T, R, E](
    outcome: Success[T] | Failure[E],
    fn: Callable[[T], R],
    *,
    on_fault: FaultHandler[E],
) -> Success[R] | Failure[E]:
    """Function form of ``outcome.map(fn, on_fault=...)``."""
    return outcome.map(fn, on_fault=on_fault)


def flat_map[T, R, E](
    outcome: Success[T] | Failure[E],
    fn: Callable[[T], Success[R] | Failure[E]],
    *,
    on_fault: FaultHandler[E],
) -> Success[R] | Failure[E]:
    """Function form of ``outcome.flat_map(fn, on_fault=...)``."""
    return outcome.flat_map(fn, on_fault=on_fault)


def lift[T, R](fn: Callable[[T], R]) -> Callable[[T], Success[R]]:
    """Turn a total function into a step that always succeeds.

    A lifted step may still raise; the chain it is used in captures that as a
    fault like any other step.
    """

    @functools.wraps(fn)
    def lifted(value: T) -> Success[R]:
        return Success(fn(value))

    return lifted


def compose[E](
    *steps: Callable[[Any], Success[Any] | Failure[E]],
    on_fault: FaultHandler[E],
) -> Callable[[Any], Success[Any] | Failure[E]]:
    """Compose type-changing steps left to right into a single step.

    ``compose(f, g, on_fault=h)(x)`` equals
    ``success(x).flat_map(f, on_fault=h).flat_map(g, on_fault=h)``. With no
    steps the result is the identity step ``success``.
    """

    def composed(value: Any) -> Success[Any] | Failure[E]:
        outcome: Success[Any] | Failure[E] = success(value)
        for step in steps:
            outcome = outcome.flat_map(step, on_fault=on_fault)
        return outcome

    composed.__name__ = "+".join(stage_name_of(s) for s in steps) or "identity"
    return composed


__all__ = ["compose", "flat_map", "lift", "map_success"]
