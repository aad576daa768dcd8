"""Unit tests for CSV loading and invalid row policies."""

import pandas as pd
import pytest

from mouseviz.activity_chart.loader import (
    ActivityDataError,
    ActivityRecord,
    InvalidRowPolicy,
    iter_records,
    load_activity_csv,
    parse_activity_frame,
)


def _raw(**overrides):
    data = {
        "Minute": ["0", "1", "2"],
        "Activity": ["1.5", "2", "3"],
        "Sex": ["M", "F", "M"],
        "Day": ["1", "1", "2"],
    }
    data.update(overrides)
    return pd.DataFrame(data)


def test_load_activity_csv_types_and_columns(activity_csv):
    """Loaded frame has lower-case columns with numeric minute/activity and Int64 day."""
    df = load_activity_csv(activity_csv)
    assert list(df.columns) == ["minute", "activity", "sex", "day"]
    assert len(df) == 6
    assert df["minute"].dtype == float
    assert df["activity"].dtype == float
    assert str(df["day"].dtype) == "Int64"
    assert df.iloc[0].tolist() == [0.0, 10.0, "M", 1]


def test_load_activity_csv_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_activity_csv(tmp_path / "nope.csv")


def test_load_activity_csv_empty_file_raises(tmp_path):
    p = tmp_path / "empty.csv"
    p.write_text("", encoding="utf-8")
    with pytest.raises(ActivityDataError):
        load_activity_csv(p)


def test_load_activity_csv_header_only_is_empty(tmp_path):
    p = tmp_path / "header.csv"
    p.write_text("Minute,Activity,Sex,Day\n", encoding="utf-8")
    df = load_activity_csv(p)
    assert df.empty
    assert list(df.columns) == ["minute", "activity", "sex", "day"]


def test_parse_missing_column_raises():
    raw = _raw().drop(columns=["Sex"])
    with pytest.raises(ActivityDataError) as exc_info:
        parse_activity_frame(raw)
    assert "Sex" in str(exc_info.value)


def test_parse_strips_sex_whitespace():
    df = parse_activity_frame(_raw(Sex=[" M", "F ", "M"]))
    assert df["sex"].tolist() == ["M", "F", "M"]


def test_parse_keep_policy_keeps_nan_rows():
    """Non-numeric text becomes NaN and the row is kept by default."""
    df = parse_activity_frame(_raw(Activity=["1.5", "oops", "3"]))
    assert len(df) == 3
    assert pd.isna(df.loc[1, "activity"])


def test_parse_drop_policy_removes_invalid_rows():
    df = parse_activity_frame(
        _raw(Minute=["0", "x", "2"], Sex=["M", "F", "Q"]),
        invalid_rows=InvalidRowPolicy.DROP,
    )
    assert len(df) == 1
    assert df.loc[0, "minute"] == 0.0
    assert list(df.index) == [0]


def test_parse_raise_policy_reports_csv_lines():
    with pytest.raises(ActivityDataError) as exc_info:
        parse_activity_frame(_raw(Activity=["1", "2", "bad"]), invalid_rows="raise")
    assert "1 invalid row" in str(exc_info.value)
    assert "[4]" in str(exc_info.value)


def test_parse_unknown_policy_raises_value_error():
    with pytest.raises(ValueError):
        parse_activity_frame(_raw(), invalid_rows="ignore")


def test_parse_non_integral_day_is_missing():
    df = parse_activity_frame(_raw(Day=["1", "1.5", "nope"]))
    assert df.loc[0, "day"] == 1
    assert pd.isna(df.loc[1, "day"])
    assert pd.isna(df.loc[2, "day"])


@pytest.mark.parametrize("day", ["inf", "-inf", "1e30"])
@pytest.mark.parametrize("policy", ["keep", "drop"])
def test_parse_unrepresentable_day_is_missing(day, policy):
    """Days that cannot be stored as integers become missing without failing the load."""
    df = parse_activity_frame(_raw(Day=["1", day, "2"]), invalid_rows=policy)
    assert len(df) == 3
    assert str(df["day"].dtype) == "Int64"
    assert pd.isna(df.loc[1, "day"])
    assert df.loc[2, "day"] == 2


@pytest.mark.parametrize("column", ["Minute", "Activity"])
def test_infinite_values_count_as_invalid(column):
    overrides = {column: ["0", "inf", "-inf"]}
    dropped = parse_activity_frame(_raw(**overrides), invalid_rows="drop")
    assert len(dropped) == 1
    with pytest.raises(ActivityDataError) as exc_info:
        parse_activity_frame(_raw(**overrides), invalid_rows="raise")
    assert "2 invalid row" in str(exc_info.value)


def test_iter_records_yields_frozen_records(activity_csv):
    records = list(iter_records(load_activity_csv(activity_csv)))
    assert len(records) == 6
    assert records[0] == ActivityRecord(minute=0.0, activity=10.0, sex="M", day=1)
    with pytest.raises(Exception):  # FrozenInstanceError
        records[0].activity = 1.0  # type: ignore[misc]
