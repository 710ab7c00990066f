"""Pytest configuration for the tour plan backend."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path so that import src works under pytest.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.api import dependencies  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_cached_service():
    """Keep the process-wide settings and service from leaking between tests."""

    dependencies.get_settings.cache_clear()
    dependencies.get_plan_service.cache_clear()
    yield
    dependencies.get_plan_service.cache_clear()
