"""Root pytest configuration for all tests.

Source packages are importable through ``pythonpath = ["src", "."]`` in
pyproject.toml, so tests import ``domain.*``, ``infrastructure.*`` and
``application.*`` directly.
"""

from pathlib import Path

import pytest


def get_fixtures_dir() -> Path:
    """Return path to tests/fixtures/ directory.

    Shared helper for tests that need fixture paths.
    Centralizes fixture directory resolution to avoid duplication.
    """
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return get_fixtures_dir()
