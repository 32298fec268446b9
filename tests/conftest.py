"""Pytest configuration and fixtures.

Provides environment isolation, logging configuration and small step
doubles. Fixtures marked autouse apply to every test unless noted.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field
import logging
import os
from typing import Any

import pytest

from railyard import Failure, Success, failure, success

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class RecordingStep:
    """Step double that records every value it is invoked with.

    Behaves like the identity step unless ``fail_with`` or ``raise_with`` is
    set. Use ``calls`` to assert that short-circuited steps never ran.
    """

    fail_with: Any = None
    raise_with: Exception | None = None
    calls: list[Any] = field(default_factory=list)

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def __call__(self, value: Any) -> Success[Any] | Failure[Any]:
        self.calls.append(value)
        if self.raise_with is not None:
            raise self.raise_with
        if self.fail_with is not None:
            return failure(self.fail_with)
        return success(value)


@pytest.fixture
def recording_step():
    """Factory for ``RecordingStep`` doubles."""

    def _make(**kwargs: Any) -> RecordingStep:
        return RecordingStep(**kwargs)

    return _make


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_railyard_env(request, monkeypatch):
    """Ensure a clean RAILYARD_* environment for each test.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("RAILYARD_"):
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("hypothesis").setLevel(logging.WARNING)
