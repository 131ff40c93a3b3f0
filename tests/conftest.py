# tests/conftest.py

"""Shared pytest fixtures for all dedupe tests."""

from collections.abc import Generator
from pathlib import Path

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_paths(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Point the default DB and report locations at a temp dir."""
    monkeypatch.setattr(Settings, "DB_PATH", tmp_path / "catalog.db")
    monkeypatch.setattr(Settings, "REPORTS_DIR", tmp_path / "reports")
    yield
