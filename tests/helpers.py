"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: it exists to prevent test suites from
growing lots of one-off steps and repositories as coverage expands.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from railyard import Failure, Success, failure, success
from railyard.samples.user_service import User


def validate_positive(number: int) -> Success[int] | Failure[ValueError]:
    if number > 0:
        return success(number)
    return failure(ValueError("Number must be positive"))


def multiply_by_two(number: int) -> Success[int] | Failure[ValueError]:
    return success(number * 2)


def subtract_five(number: int) -> Success[int] | Failure[ValueError]:
    return success(number - 5)


@dataclass
class CapturingRepository:
    """Repository double that records saves and assigns a fixed id."""

    assigned_id: int = 42
    saved: list[User] = field(default_factory=list)

    def save(self, user: User) -> User:
        self.saved.append(user)
        return user.model_copy(update={"id": self.assigned_id})


@dataclass
class BrokenRepository:
    """Repository double whose save() always raises."""

    error: Exception = field(default_factory=lambda: ConnectionError("db down"))
    attempts: int = 0

    def save(self, user: User) -> User:
        del user
        self.attempts += 1
        raise self.error
