# tests/conftest.py

"""Shared pytest fixtures for the campus_market test suite."""

from collections.abc import Generator
from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def no_fetch_latency(
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Drop the simulated fetch delay so async tests run instantly."""
    monkeypatch.setattr(Settings, "SIMULATED_LATENCY", 0.0)
    yield


@pytest.fixture(autouse=True)
def isolated_results_dir(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[Path, None, None]:
    """Keep saved and exported files out of the working tree."""
    results = tmp_path / "results"
    monkeypatch.setattr(Settings, "RESULTS_DIR", results)
    yield results
