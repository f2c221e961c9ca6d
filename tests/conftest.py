"""Shared pytest fixtures and test helpers for assertkit tests."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from assertkit.config.settings import reset_settings
from assertkit.reporters import RecordingReporter

pytest_plugins = ["pytester"]


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Reload settings from a clean environment for every test."""
    monkeypatch.delenv("ASSERTKIT_CONFIG", raising=False)
    for name in ("VERBOSE", "LOG_JSON", "REPORT__ERROR_TRACE", "COMPARE__NAIVE_TIMEZONE"):
        monkeypatch.delenv(f"ASSERTKIT_{name}", raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def recorder() -> RecordingReporter:
    """A reporter that records failures without failing the current test."""
    return RecordingReporter()
