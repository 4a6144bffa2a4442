import math
from datetime import date, datetime

import pandas as pd
import pytest

from meridian.records import (
    NUMERIC_FIELDS,
    AssignmentRecord,
    RecordValidationError,
    assignment_dates,
    coerce_records,
    metric_series,
)


def test_from_dict_fills_missing_scores_with_zero():
    record = AssignmentRecord.from_dict({"assignment_date": "2026-01-05", "post_strain_score": 0.6})
    assert record.assignment_date == date(2026, 1, 5)
    assert record.post_strain_score == 0.6
    for name in NUMERIC_FIELDS:
        if name != "post_strain_score":
            assert getattr(record, name) == 0.0
    assert record.post_recovery_actions == frozenset()


def test_from_dict_treats_none_and_nan_as_zero():
    record = AssignmentRecord.from_dict({
        "assignment_date": date(2026, 1, 5),
        "eri_assign_score": None,
        "recovery_reflection_score": float("nan"),
        "post_recovery_actions": None,
    })
    assert record.eri_assign_score == 0.0
    assert record.recovery_reflection_score == 0.0
    assert not math.isnan(record.recovery_reflection_score)


def test_from_dict_accepts_datetime_and_timestamp():
    a = AssignmentRecord.from_dict({"assignment_date": datetime(2026, 1, 5, 14, 30)})
    b = AssignmentRecord.from_dict({"assignment_date": pd.Timestamp("2026-01-05T09:00:00")})
    assert a.assignment_date == date(2026, 1, 5)
    assert b.assignment_date == date(2026, 1, 5)


def test_from_dict_ignores_unknown_keys():
    record = AssignmentRecord.from_dict({"assignment_date": "2026-01-05", "user_id": "abc"})
    assert record.assignment_date == date(2026, 1, 5)


def test_actions_become_frozenset():
    record = AssignmentRecord.from_dict({
        "assignment_date": "2026-01-05",
        "post_recovery_actions": ["walk", "debrief", "walk"],
    })
    assert record.post_recovery_actions == frozenset({"walk", "debrief"})


@pytest.mark.parametrize(
    "row, field_name",
    [
        ({}, "assignment_date"),
        ({"assignment_date": "not a date"}, "assignment_date"),
        ({"assignment_date": 20260105}, "assignment_date"),
        ({"assignment_date": "2026-01-05", "post_strain_score": "high"}, "post_strain_score"),
        ({"assignment_date": "2026-01-05", "eri_assign_score": True}, "eri_assign_score"),
        ({"assignment_date": "2026-01-05", "eri_assign_score": float("inf")}, "eri_assign_score"),
        ({"assignment_date": "2026-01-05", "post_strain_score": -0.2}, "post_strain_score"),
        ({"assignment_date": ""}, "assignment_date"),
        ({"assignment_date": "2026-01-05", "post_recovery_actions": "walk"}, "post_recovery_actions"),
        ({"assignment_date": "2026-01-05", "post_recovery_actions": ["walk", 3]}, "post_recovery_actions"),
    ],
)
def test_malformed_rows_fail_fast(row, field_name):
    with pytest.raises(RecordValidationError) as excinfo:
        AssignmentRecord.from_dict(row)
    assert excinfo.value.field_name == field_name
    assert isinstance(excinfo.value, ValueError)


def test_non_mapping_row_rejected():
    with pytest.raises(RecordValidationError):
        coerce_records([["2026-01-05", 0.5]])


def test_coerce_records_sorts_without_mutating_input():
    rows = [
        {"assignment_date": "2026-01-19", "eri_assign_score": 3},
        {"assignment_date": "2026-01-05", "eri_assign_score": 1},
        {"assignment_date": "2026-01-12", "eri_assign_score": 2},
    ]
    snapshot = [dict(r) for r in rows]

    out = coerce_records(rows)

    assert [r.eri_assign_score for r in out] == [1.0, 2.0, 3.0]
    assert rows == snapshot


def test_coerce_records_keeps_same_day_order():
    rows = [
        AssignmentRecord(date(2026, 1, 5), eri_assign_score=1),
        AssignmentRecord(date(2026, 1, 5), eri_assign_score=2),
    ]
    assert [r.eri_assign_score for r in coerce_records(rows)] == [1, 2]


def test_coerce_records_rejects_none():
    with pytest.raises(RecordValidationError):
        coerce_records(None)


def test_metric_series_in_chronological_order():
    records = coerce_records([
        {"assignment_date": "2026-01-12", "post_strain_score": 0.4},
        {"assignment_date": "2026-01-05", "post_strain_score": 0.2},
    ])
    assert list(metric_series(records, "post_strain_score")) == [0.2, 0.4]


def test_metric_series_unknown_field():
    with pytest.raises(KeyError):
        metric_series([], "post_recovery_actions")


def test_assignment_dates_series():
    records = coerce_records([
        {"assignment_date": "2026-01-10"},
        {"assignment_date": "2026-01-05"},
    ])
    dates = assignment_dates(records)
    assert pd.api.types.is_datetime64_any_dtype(dates)
    assert list(dates.dt.day) == [5, 10]
    assert list(dates.dt.dayofweek) == [0, 5]


@pytest.mark.parametrize("value", ["", "NaT", pd.NaT])
def test_missing_date_values_rejected(value):
    with pytest.raises(RecordValidationError) as excinfo:
        coerce_records([
            {"assignment_date": "2026-01-05"},
            {"assignment_date": value},
        ])
    assert excinfo.value.field_name == "assignment_date"


def test_direct_construction_is_validated():
    with pytest.raises(RecordValidationError) as excinfo:
        AssignmentRecord("2026-01-05")
    assert excinfo.value.field_name == "assignment_date"

    with pytest.raises(RecordValidationError) as excinfo:
        AssignmentRecord(date(2026, 1, 5), post_strain_score="high")
    assert excinfo.value.field_name == "post_strain_score"

    with pytest.raises(RecordValidationError) as excinfo:
        AssignmentRecord(date(2026, 1, 5), post_recovery_actions="walk")
    assert excinfo.value.field_name == "post_recovery_actions"


def test_direct_construction_normalises_fields():
    record = AssignmentRecord(
        datetime(2026, 1, 5, 14, 30),
        eri_assign_score=70,
        recovery_reflection_score=None,
        post_recovery_actions=["walk", "walk"],
    )
    assert record.assignment_date == date(2026, 1, 5)
    assert isinstance(record.eri_assign_score, float)
    assert record.recovery_reflection_score == 0.0
    assert record.post_recovery_actions == frozenset({"walk"})


def test_negative_score_rejected():
    with pytest.raises(RecordValidationError) as excinfo:
        AssignmentRecord(date(2026, 1, 5), eri_assign_score=-10.0)
    assert excinfo.value.field_name == "eri_assign_score"


def test_to_dict_is_json_ready():
    record = AssignmentRecord(date(2026, 1, 5), post_recovery_actions=frozenset({"walk", "debrief"}))
    out = record.to_dict()
    assert out["assignment_date"] == "2026-01-05"
    assert out["post_recovery_actions"] == ["debrief", "walk"]
