"""Shared fixtures for the chart tests."""

from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pytest  # noqa: E402

from wage_price_data import Record  # noqa: E402


@pytest.fixture(autouse=True)
def close_figures():
    """Every test starts and ends with no open pyplot figures."""

    plt.close("all")
    yield
    plt.close("all")


@pytest.fixture
def sample_records() -> list[Record]:
    """The three-row example: wages only for 1620."""

    return [
        Record(year=1600, wheat=40.0, wages=None),
        Record(year=1620, wheat=42.0, wages=8.5),
        Record(year=1650, wheat=48.0, wages=None),
    ]


@pytest.fixture
def gappy_records() -> list[Record]:
    """Evenly spaced years with a wage gap in the middle and at the end."""

    wages = [5.0, 5.5, 6.0, None, 7.0, 7.5, None]
    wheat = [41.0, 45.0, 42.0, 49.0, 41.5, 47.0, 64.0]
    return [Record(year=1565 + 5 * i, wheat=wheat[i], wages=wages[i]) for i in range(len(wages))]


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a temp file and return its path."""

    def _write(text: str, name: str = "data.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
