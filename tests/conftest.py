"""Shared test fixtures for the definekit test suite."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from definekit.api import Definer
from loader_helpers import RecordingLoader


# === Fixtures ===


@pytest.fixture
def definer() -> Definer:
    """An isolated Definer that is not installed process-wide."""
    return Definer()


@pytest.fixture
def loader() -> RecordingLoader:
    """A loader that succeeds immediately."""
    return RecordingLoader()


@pytest.fixture
def deferred_loader() -> RecordingLoader:
    """A loader that holds its continuations until settle_all() is called."""
    return RecordingLoader(defer=True)


@pytest.fixture
def counting_factory() -> Callable[..., Any]:
    """Factory returning a fresh object per call and counting invocations."""

    def factory(*deps: Any) -> dict[str, Any]:
        factory.calls += 1  # type: ignore[attr-defined]
        return {"deps": list(deps), "call": factory.calls}  # type: ignore[attr-defined]

    factory.calls = 0  # type: ignore[attr-defined]
    return factory
