"""Unit tests for ActivityAggregator grouping, means and sex filtering."""

import numpy as np
import pandas as pd
import pytest

from mouseviz.activity_chart.aggregator import (
    ActivityAggregator,
    AggregatedPoint,
    series_by_sex,
)
from mouseviz.activity_chart.sex_filter import SEX_FILTER_ALL


@pytest.fixture
def aggregator(records_df):
    return ActivityAggregator(records_df)


def test_one_point_per_sex_minute_pair(aggregator, records_df):
    agg = aggregator.aggregate(SEX_FILTER_ALL)
    expected_pairs = set(zip(records_df["sex"], records_df["minute"]))
    got_pairs = list(zip(agg["sex"], agg["minute"]))
    assert len(got_pairs) == len(set(got_pairs))
    assert set(got_pairs) == expected_pairs


def test_activity_is_arithmetic_mean(aggregator, records_df):
    agg = aggregator.aggregate(SEX_FILTER_ALL)
    for sex, minute, activity in agg.itertuples(index=False, name=None):
        match = records_df[(records_df["sex"] == sex) & (records_df["minute"] == minute)]
        assert activity == pytest.approx(match["activity"].mean())


def test_sex_order_is_first_appearance_and_minutes_ascend(aggregator):
    agg = aggregator.aggregate(SEX_FILTER_ALL)
    assert list(pd.unique(agg["sex"])) == ["M", "F"]
    for _, sub in agg.groupby("sex"):
        assert np.all(np.diff(sub["minute"].to_numpy()) > 0)


def test_filter_single_sex(aggregator):
    agg = aggregator.aggregate("F")
    assert set(agg["sex"]) == {"F"}
    assert agg["minute"].tolist() == [0.0, 1.0, 2.0]
    assert agg["activity"].tolist() == pytest.approx([6.0, 6.0, 8.0])


def test_filter_round_trip_reproduces_all(aggregator):
    """all -> M -> all gives exactly the first aggregation."""
    first = aggregator.aggregate("all")
    aggregator.aggregate("M")
    again = aggregator.aggregate("all")
    pd.testing.assert_frame_equal(first, again)


def test_empty_input_gives_empty_result():
    empty = pd.DataFrame({"minute": [], "activity": [], "sex": [], "day": []})
    agg = ActivityAggregator(empty).aggregate()
    assert agg.empty
    assert list(agg.columns) == ["sex", "minute", "activity"]


def test_filter_with_no_matches_is_empty():
    df = pd.DataFrame({"minute": [0.0], "activity": [1.0], "sex": ["M"], "day": [1]})
    assert ActivityAggregator(df).aggregate("F").empty


def test_nan_activity_skipped_and_nan_minute_not_grouped():
    df = pd.DataFrame(
        {
            "minute": [0.0, 0.0, np.nan],
            "activity": [4.0, np.nan, 100.0],
            "sex": ["M", "M", "M"],
            "day": [1, 2, 3],
        }
    )
    agg = ActivityAggregator(df).aggregate()
    assert agg["minute"].tolist() == [0.0]
    assert agg["activity"].tolist() == [4.0]


def test_filter_by_sex_unfiltered_returns_all_rows(aggregator, records_df):
    assert len(aggregator.filter_by_sex("all")) == len(records_df)
    assert len(aggregator.filter_by_sex(None)) == len(records_df)
    males = aggregator.filter_by_sex("m")
    assert set(males["sex"]) == {"M"}
    assert len(males) == int((records_df["sex"] == "M").sum())


def test_unknown_filter_raises(aggregator):
    with pytest.raises(ValueError):
        aggregator.aggregate("X")


def test_missing_column_raises(records_df):
    with pytest.raises(ValueError) as exc_info:
        ActivityAggregator(records_df.drop(columns=["day"]))
    assert "day" in str(exc_info.value)


def test_aggregate_points(aggregator):
    points = aggregator.aggregate_points("M")
    assert points[0] == AggregatedPoint(sex="M", minute=0.0, activity=12.0)
    assert points[-1] == AggregatedPoint(sex="M", minute=3.0, activity=40.0)


def test_series_by_sex(aggregator):
    series = series_by_sex(aggregator.aggregate())
    assert list(series) == ["M", "F"]
    assert series["M"].minutes.tolist() == [0.0, 1.0, 2.0, 3.0]
    assert series["M"].activity.tolist() == pytest.approx([12.0, 21.0, 31.0, 40.0])
    assert len(series["F"]) == 3


def test_sex_values(aggregator):
    assert aggregator.sex_values() == ["M", "F"]
