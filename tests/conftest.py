from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


@pytest.fixture
def fixed_clock():
    """Clock pinned to a known year for banner assertions."""
    return lambda: datetime(2031, 5, 17, 12, 0, 0)
