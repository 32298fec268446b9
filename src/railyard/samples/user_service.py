"""User creation workflow built on railyard.

The service chains four stages with ``flat_map``/``map``:

    validate -> to_entity -> save -> to_record

Validation itself is a same-typed ``Pipeline`` of record checks. Persistence
goes through an injected ``UserRepository`` so tests can substitute a double;
anything the repository raises lands on the failure track as a
``UserError`` of kind ``PERSISTENCE``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import itertools
import logging
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from railyard.config import PipelineConfig
from railyard.outcome import Failure, Success, failure, success
from railyard.pipeline import Pipeline

log = logging.getLogger(__name__)


# --- Data shapes ---


class UserRecord(BaseModel):
    """Incoming or outgoing user data."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: str | None = None
    #: Assigned by the repository; absent on incoming records.
    id: int | None = None


class User(BaseModel):
    """Persistence-ready user entity."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str = Field(min_length=1)
    #: Shape is checked by ``require_email``; the entity accepts what it accepts.
    email: str


class UserErrorKind(Enum):
    INVALID_NAME = "invalid_name"
    INVALID_EMAIL = "invalid_email"
    PERSISTENCE = "persistence"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class UserError:
    """Structured failure for the user workflow."""

    kind: UserErrorKind
    message: str
    cause: Exception | None = None

    @classmethod
    def from_fault(cls, exc: Exception) -> UserError:
        """Convert an unexpected fault into an ``UNEXPECTED`` error."""
        return cls(UserErrorKind.UNEXPECTED, f"{type(exc).__name__}: {exc}", exc)

    @classmethod
    def from_persistence_fault(cls, exc: Exception) -> UserError:
        """Convert a repository fault into a ``PERSISTENCE`` error."""
        return cls(UserErrorKind.PERSISTENCE, f"Could not save user: {exc}", exc)

    def __str__(self) -> str:
        return self.message


# --- Collaborators ---


@runtime_checkable
class UserRepository(Protocol):
    """Persistence capability consumed by the save stage."""

    def save(self, user: User) -> User: ...


class InMemoryUserRepository:
    """Repository double that assigns sequential ids and keeps users in memory."""

    def __init__(self, *, first_id: int = 1) -> None:
        self._ids = itertools.count(first_id)
        self.users: dict[int, User] = {}

    def save(self, user: User) -> User:
        saved = user.model_copy(update={"id": next(self._ids)})
        self.users[saved.id] = saved
        log.info("Saved user id=%s", saved.id)
        return saved


# --- Validation steps (same-typed) ---


def require_name(record: UserRecord) -> Success[UserRecord] | Failure[UserError]:
    if record.name is None or not record.name.strip():
        return failure(
            UserError(UserErrorKind.INVALID_NAME, "Name cannot be null or empty")
        )
    return success(record)


def require_email(record: UserRecord) -> Success[UserRecord] | Failure[UserError]:
    if record.email is None or "@" not in record.email:
        return failure(UserError(UserErrorKind.INVALID_EMAIL, "Invalid email address"))
    return success(record)


def normalize_record(record: UserRecord) -> Success[UserRecord] | Failure[UserError]:
    name = (record.name or "").strip()
    email = (record.email or "").strip().lower()
    return success(record.model_copy(update={"name": name, "email": email}))


def build_validation_pipeline(
    config: PipelineConfig | None = None,
) -> Pipeline[UserRecord, UserError]:
    """Return the record-validation pipeline used by ``UserService``."""
    return (
        Pipeline(
            on_fault=UserError.from_fault,
            config=config or PipelineConfig(name="user-validation"),
        )
        .add_step(require_name)
        .add_step(require_email)
        .add_step(normalize_record)
    )


# --- Service ---


class UserService:
    """Creates users through a fail-fast chain of fallible stages."""

    def __init__(
        self,
        repository: UserRepository | None = None,
        *,
        validation: Pipeline[UserRecord, UserError] | None = None,
    ) -> None:
        self._repository = (
            repository if repository is not None else InMemoryUserRepository()
        )
        self._validation = (
            validation if validation is not None else build_validation_pipeline()
        )

    def create_user(
        self, record: UserRecord
    ) -> Success[UserRecord] | Failure[UserError]:
        """Validate, persist and echo back a user record."""
        return (
            success(record)
            .flat_map(self.validate, on_fault=UserError.from_fault)
            .flat_map(self.to_entity, on_fault=UserError.from_fault)
            .flat_map(self.save, on_fault=UserError.from_persistence_fault)
            .map(self.to_record, on_fault=UserError.from_fault)
        )

    def validate(self, record: UserRecord) -> Success[UserRecord] | Failure[UserError]:
        return self._validation.execute(record)

    def to_entity(self, record: UserRecord) -> Success[User] | Failure[UserError]:
        # pydantic validation errors surface as UNEXPECTED faults
        return success(User(name=record.name, email=record.email))

    def save(self, user: User) -> Success[User] | Failure[UserError]:
        return success(self._repository.save(user))

    @staticmethod
    def to_record(user: User) -> UserRecord:
        return UserRecord(id=user.id, name=user.name, email=user.email)


__all__ = [
    "InMemoryUserRepository",
    "User",
    "UserError",
    "UserErrorKind",
    "UserRecord",
    "UserRepository",
    "UserService",
    "build_validation_pipeline",
    "require_email",
    "require_name",
]
