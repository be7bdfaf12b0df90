"""
Pytest configuration for Basil tests.
"""
from pathlib import Path

import pytest

EXAMPLES_DIR = Path(__file__).resolve().parents[1] / 'examples'


@pytest.fixture
def examples_dir() -> Path:
    return EXAMPLES_DIR
