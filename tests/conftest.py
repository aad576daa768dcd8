# tests/conftest.py
"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import sys
from pathlib import Path

import pandas as pd
import pytest


def pytest_configure() -> None:
    # Ensure mouseviz package is importable when running tests from repo root.
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"
    if src_dir.exists() and str(src_dir) not in sys.path:
        sys.path.insert(0, str(src_dir))


@pytest.fixture
def records_df() -> pd.DataFrame:
    """Parsed records: two days per sex, minutes 0/1/2, one M-only minute 3."""
    return pd.DataFrame(
        {
            "minute": [0.0, 1.0, 2.0, 0.0, 1.0, 2.0, 0.0, 1.0, 2.0, 0.0, 2.0, 3.0],
            "activity": [10.0, 20.0, 30.0, 14.0, 22.0, 32.0, 5.0, 6.0, 7.0, 7.0, 9.0, 40.0],
            "sex": ["M", "M", "M", "M", "M", "M", "F", "F", "F", "F", "F", "M"],
            "day": pd.array([1, 1, 1, 2, 2, 2, 1, 1, 1, 2, 2, 2], dtype="Int64"),
        }
    )


@pytest.fixture
def activity_csv(tmp_path: Path) -> Path:
    """Small well-formed activity CSV file."""
    p = tmp_path / "activity.csv"
    p.write_text(
        "Minute,Activity,Sex,Day\n"
        "0,10,M,1\n"
        "1,20,M,1\n"
        "0,5,F,1\n"
        "1,7,F,1\n"
        "0,14,M,2\n"
        "1,9,F,2\n",
        encoding="utf-8",
    )
    return p
