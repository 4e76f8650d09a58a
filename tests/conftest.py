"""Test configuration for pytest."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Put ``src`` on ``sys.path`` so the tests run without an editable install.
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))


@pytest.fixture
def sample_data():
    return [2.0, 7.0, 1.0, -3.0, 2.0, -2.0]
