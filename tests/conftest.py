"""Shared test fixtures."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest


@pytest.fixture
def reference_date() -> date:
    """Fixed start date so payoff dates are reproducible."""
    return date(2025, 1, 15)


@pytest.fixture
def golden_dir() -> Path:
    return Path(__file__).parent / "golden"
