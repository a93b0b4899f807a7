# tests/conftest.py
"""Shared test fixtures and helpers.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from hypothesis import Phase, Verbosity, settings
from structlog.testing import capture_logs

from tracy.contracts import CircularDependency
from tracy.core.locker import AdjacencyAccumulator

from tests.fixtures.factories import make_record

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture
def accumulator_factory() -> Callable[..., AdjacencyAccumulator]:
    """Accumulator pre-filled from (suspect, leads, source) tuples."""

    def _build(*records: tuple[str, list[str], str | None]) -> AdjacencyAccumulator:
        accumulator = AdjacencyAccumulator()
        for suspect, leads, source in records:
            accumulator.ingest(make_record(suspect, leads, source))
        return accumulator

    return _build


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Undo configure_logging() calls so handlers never outlive their streams."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def circular_events() -> list[CircularDependency]:
    """Collects circular dependency diagnostics passed to an on_circular handler."""
    return []


@pytest.fixture
def captured_logs() -> Iterator[list[dict[str, Any]]]:
    with capture_logs() as logs:
        yield logs
