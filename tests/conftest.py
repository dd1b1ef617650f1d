"""Pytest configuration for repository-relative imports."""

import os
import sys

import matplotlib
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

matplotlib.use("Agg")

from freqtab.data_processing import make_row  # noqa: E402


@pytest.fixture
def grouped_rows():
    """Three contiguous classes with a single interior mode."""
    return [make_row("10-20", "5"), make_row("20-30", "8"), make_row("30-40", "3")]


@pytest.fixture
def discrete_rows():
    return [
        make_row("1", "2"),
        make_row("2", "4"),
        make_row("3", "5"),
        make_row("4", "3"),
    ]
