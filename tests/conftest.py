"""Test configuration for pytest."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure the project root is on ``sys.path`` so tests can import ``lqe`` without
# requiring an editable install.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def prior():
    """Reference prior belief used across the scenario tests."""
    from lqe import LQE
    return LQE(3.0, 2.0)
