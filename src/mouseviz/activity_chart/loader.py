"""CSV loading for mouse activity records.

Reads a CSV with columns ``Minute, Activity, Sex, Day`` into a typed
DataFrame with columns ``minute, activity, sex, day``. Numeric columns are
coerced the lenient way: text that does not parse becomes NaN rather than
failing the load. What happens to such rows is decided by InvalidRowPolicy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Union

import numpy as np
import pandas as pd

from mouseviz.utils.logging import get_logger
from mouseviz.activity_chart.sex_filter import SEX_CATEGORIES

logger = get_logger(__name__)

# CSV header -> DataFrame column
CSV_COLUMNS: dict[str, str] = {
    "Minute": "minute",
    "Activity": "activity",
    "Sex": "sex",
    "Day": "day",
}
RECORD_COLUMNS: list[str] = list(CSV_COLUMNS.values())

DEFAULT_DATA_PATH = Path("data") / "all_mouse_cleaned.csv"


class ActivityDataError(ValueError):
    """Raised when an activity CSV is structurally unusable."""


class InvalidRowPolicy(str, Enum):
    """What to do with rows whose minute/activity is not numeric or whose sex is unknown."""

    KEEP = "keep"
    DROP = "drop"
    RAISE = "raise"


@dataclass(frozen=True)
class ActivityRecord:
    """One raw observation."""

    minute: float
    activity: float
    sex: str
    day: Optional[int] = None


def _resolve_policy(policy: Union[str, InvalidRowPolicy]) -> InvalidRowPolicy:
    if isinstance(policy, InvalidRowPolicy):
        return policy
    try:
        return InvalidRowPolicy(str(policy).lower())
    except ValueError:
        raise ValueError(
            f"Unknown invalid_rows policy {policy!r}, expected one of "
            f"{[p.value for p in InvalidRowPolicy]}"
        ) from None


def invalid_row_mask(df: pd.DataFrame) -> pd.Series:
    """Boolean mask of rows with non-finite minute/activity or a sex outside SEX_CATEGORIES."""
    return (
        ~np.isfinite(df["minute"])
        | ~np.isfinite(df["activity"])
        | ~df["sex"].isin(SEX_CATEGORIES)
    )


def parse_activity_frame(
    raw: pd.DataFrame,
    *,
    invalid_rows: Union[str, InvalidRowPolicy] = InvalidRowPolicy.KEEP,
) -> pd.DataFrame:
    """Convert a raw CSV frame into typed activity records.

    Args:
        raw: Frame as read from the CSV (string or mixed columns).
        invalid_rows: Policy for rows that fail coercion, see InvalidRowPolicy.

    Returns:
        DataFrame with columns minute (float), activity (float), sex (str)
        and day (nullable Int64), in file order with a fresh RangeIndex.

    Raises:
        ActivityDataError: If a required column is missing, or if
            invalid_rows is "raise" and any row is invalid.
    """
    policy = _resolve_policy(invalid_rows)

    missing = [c for c in CSV_COLUMNS if c not in raw.columns]
    if missing:
        raise ActivityDataError(f"Activity CSV is missing required column(s): {missing}")

    day = pd.to_numeric(raw["Day"], errors="coerce").astype(float)
    # non-integral, infinite and out-of-int64 days are treated as missing
    day = day.where(np.isfinite(day) & (day == day.round()) & (day.abs() < 2**63))

    df = pd.DataFrame(
        {
            "minute": pd.to_numeric(raw["Minute"], errors="coerce").astype(float),
            "activity": pd.to_numeric(raw["Activity"], errors="coerce").astype(float),
            "sex": raw["Sex"].map(lambda v: v.strip() if isinstance(v, str) else None),
            "day": day.astype("Int64"),
        }
    )

    bad = invalid_row_mask(df)
    n_bad = int(bad.sum())
    if n_bad:
        # +2: header line plus 1-based numbering
        first_lines = [int(i) + 2 for i in df.index[bad.to_numpy()][:5]]
        if policy is InvalidRowPolicy.RAISE:
            raise ActivityDataError(
                f"{n_bad} invalid row(s) in activity data, first at CSV line(s) {first_lines}"
            )
        if policy is InvalidRowPolicy.DROP:
            logger.warning(f"Dropping {n_bad} invalid row(s), first at CSV line(s) {first_lines}")
            df = df[~bad]
        else:
            logger.warning(
                f"Keeping {n_bad} invalid row(s) (NaN or unknown sex), first at CSV line(s) {first_lines}"
            )

    return df.reset_index(drop=True)


def load_activity_csv(
    path: Union[str, Path] = DEFAULT_DATA_PATH,
    *,
    invalid_rows: Union[str, InvalidRowPolicy] = InvalidRowPolicy.KEEP,
) -> pd.DataFrame:
    """Load an activity CSV file.

    Raises:
        FileNotFoundError: If path does not exist.
        ActivityDataError: See parse_activity_frame.
    """
    p = Path(path).expanduser()
    if not p.is_file():
        raise FileNotFoundError(str(p))

    try:
        raw = pd.read_csv(p, dtype=str, skipinitialspace=True)
    except pd.errors.EmptyDataError:
        raise ActivityDataError(f"Activity CSV {p} is empty") from None

    df = parse_activity_frame(raw, invalid_rows=invalid_rows)
    logger.info(f"Loaded {len(df)} activity records from {p}")
    return df


def iter_records(df: pd.DataFrame) -> Iterator[ActivityRecord]:
    """Yield ActivityRecord objects for each row of a parsed frame."""
    for minute, activity, sex, day in df[RECORD_COLUMNS].itertuples(index=False, name=None):
        yield ActivityRecord(
            minute=float(minute),
            activity=float(activity),
            sex=sex,
            day=None if pd.isna(day) else int(day),
        )
