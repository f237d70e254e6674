"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def epoch() -> datetime:
    """Reference instant shared by temporal tests."""
    return datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def clock(epoch: datetime):
    """Manually advanced clock starting at the reference instant."""
    from core.clock import FixedClock

    return FixedClock(epoch)
