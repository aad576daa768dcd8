"""Aggregation of activity records by sex and minute.

This module provides ActivityAggregator, which filters the loaded records by
sex and averages activity per (sex, minute), separating data processing from
the plotting and UI code.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pandas as pd

from mouseviz.utils.logging import get_logger
from mouseviz.activity_chart.loader import RECORD_COLUMNS
from mouseviz.activity_chart.sex_filter import SEX_FILTER_ALL, is_filtered, normalize_sex_filter

logger = get_logger(__name__)

AGGREGATED_COLUMNS: list[str] = ["sex", "minute", "activity"]


@dataclass(frozen=True)
class AggregatedPoint:
    """Mean activity for one sex at one minute."""

    sex: str
    minute: float
    activity: float


@dataclass(frozen=True)
class SexSeries:
    """Minute-sorted aggregated values for one sex.

    Attributes:
        sex: Sex category.
        minutes: Strictly increasing minute values.
        activity: Mean activity at each minute.
    """

    sex: str
    minutes: np.ndarray
    activity: np.ndarray

    def __len__(self) -> int:
        return len(self.minutes)


def empty_aggregation() -> pd.DataFrame:
    """Aggregated frame with the right columns and no rows."""
    return pd.DataFrame(
        {
            "sex": pd.Series(dtype=object),
            "minute": pd.Series(dtype=float),
            "activity": pd.Series(dtype=float),
        }
    )


class ActivityAggregator:
    """Groups activity records by sex, then by minute, and averages activity.

    Attributes:
        df: The loaded records (columns minute, activity, sex, day).
    """

    def __init__(self, df: pd.DataFrame) -> None:
        """Initialize with parsed records.

        Raises:
            ValueError: If a record column is missing.
        """
        missing = [c for c in RECORD_COLUMNS if c not in df.columns]
        if missing:
            raise ValueError(f"df must contain record column(s) {missing}")
        self.df = df

    def sex_values(self) -> list[str]:
        """Sex categories present in the records, in order of first appearance."""
        return [s for s in pd.unique(self.df["sex"]) if isinstance(s, str)]

    def filter_by_sex(self, selection: str = SEX_FILTER_ALL) -> pd.DataFrame:
        """Rows matching the selector value; all rows for SEX_FILTER_ALL."""
        if not is_filtered(selection):
            return self.df
        return self.df[self.df["sex"] == normalize_sex_filter(selection)]

    def aggregate(self, selection: str = SEX_FILTER_ALL) -> pd.DataFrame:
        """Mean activity per (sex, minute) for the filtered records.

        Returns:
            DataFrame with columns sex, minute, activity: one row per distinct
            (sex, minute) pair. Sexes appear in first-appearance order and
            minutes ascend within each sex. Empty when nothing matches.
            Rows with a missing minute or sex are not grouped; NaN activity
            values are skipped by the mean.
        """
        df_f = self.filter_by_sex(selection)
        if df_f.empty:
            logger.debug(f"aggregate: no records for selection={selection!r}")
            return empty_aggregation()

        agg = (
            df_f.groupby(["sex", "minute"], sort=False)["activity"]
            .mean()
            .reset_index()
        )
        if agg.empty:
            return empty_aggregation()

        order = {sex: i for i, sex in enumerate(pd.unique(df_f["sex"]))}
        agg["_order"] = agg["sex"].map(order)
        agg = (
            agg.sort_values(["_order", "minute"], kind="mergesort")
            .drop(columns="_order")
            .reset_index(drop=True)
        )
        logger.debug(
            f"aggregate: selection={selection!r}, records={len(df_f)}, points={len(agg)}"
        )
        return agg[AGGREGATED_COLUMNS]

    def aggregate_points(self, selection: str = SEX_FILTER_ALL) -> list[AggregatedPoint]:
        """Same as aggregate(), as a list of AggregatedPoint."""
        return points_from_frame(self.aggregate(selection))


def points_from_frame(agg: pd.DataFrame) -> list[AggregatedPoint]:
    """Convert an aggregated frame into AggregatedPoint objects."""
    return [
        AggregatedPoint(sex=sex, minute=float(minute), activity=float(activity))
        for sex, minute, activity in agg[AGGREGATED_COLUMNS].itertuples(index=False, name=None)
    ]


def series_by_sex(agg: pd.DataFrame) -> dict[str, SexSeries]:
    """Split an aggregated frame into per-sex minute-sorted series.

    Keys keep the row order of agg (first-appearance order of sexes).
    """
    result: dict[str, SexSeries] = {}
    for sex, sub in agg.groupby("sex", sort=False):
        sub = sub.sort_values("minute", kind="mergesort")
        result[str(sex)] = SexSeries(
            sex=str(sex),
            minutes=sub["minute"].to_numpy(dtype=float),
            activity=sub["activity"].to_numpy(dtype=float),
        )
    return result
