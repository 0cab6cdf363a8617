"""Pytest configuration and shared fixtures."""

import tempfile
from datetime import datetime
from pathlib import Path

import pytest  # type: ignore[import-not-found]

from tempo.app import AppContext

NOW = datetime(2025, 11, 16, 18, 0, 0)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: Integration tests")


@pytest.fixture
def temp_dir() -> Path:
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def app(temp_dir: Path) -> AppContext:
    """Application context with temporary storage and a fixed clock."""
    return AppContext.create(temp_dir / "data", clock=lambda: NOW)


@pytest.fixture
def reload(temp_dir: Path):  # type: ignore[no-untyped-def]
    """Factory for a fresh context on the same data directory, as a new run would see."""

    def _reload() -> AppContext:
        return AppContext.create(temp_dir / "data", clock=lambda: NOW)

    return _reload
