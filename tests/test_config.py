from datetime import date

import pytest

from meridian.config import (
    LOOKBACK_WEEKS,
    BurnoutPredictionParams,
    FrequencyThresholds,
    MeridianConfig,
    TrendParams,
    lookback_start,
    within_lookback,
)
from meridian.records import AssignmentRecord


def test_default_config_builds():
    cfg = MeridianConfig()
    assert cfg.trend.min_data_points == 5
    assert cfg.burnout_rule.confidence == 85.0
    assert cfg.prediction.timeline_weeks == {"critical": 2, "high": 4, "medium": 8, "low": 12}


def test_risk_bands_must_descend():
    with pytest.raises(ValueError):
        BurnoutPredictionParams(critical_at=40.0, high_at=50.0)


def test_min_records_cannot_exceed_window():
    with pytest.raises(ValueError):
        BurnoutPredictionParams(window=6, min_records=8)


def test_timeline_must_cover_every_level():
    with pytest.raises(ValueError):
        BurnoutPredictionParams(timeline_weeks={"critical": 2})


def test_frequency_bands_ordered():
    with pytest.raises(ValueError):
        FrequencyThresholds(high_risk_gap_days=5.0, medium_risk_gap_days=4.0)


def test_trend_window_too_small():
    with pytest.raises(ValueError):
        TrendParams(recent_window=1)


def test_lookback_weeks():
    assert LOOKBACK_WEEKS == {"4w": 4, "8w": 8, "12w": 12, "26w": 26}


def test_lookback_start():
    assert lookback_start("8w", date(2026, 3, 1)) == date(2026, 1, 4)
    assert lookback_start("4w", date(2026, 3, 1)) == date(2026, 2, 1)


def test_lookback_unknown_window():
    with pytest.raises(ValueError):
        lookback_start("6m", date(2026, 3, 1))


def test_within_lookback_filters_and_keeps_order():
    records = [
        AssignmentRecord(date(2026, 1, 1)),
        AssignmentRecord(date(2026, 2, 10)),
        AssignmentRecord(date(2026, 2, 20)),
    ]
    kept = within_lookback(records, "4w", date(2026, 3, 1))
    assert [r.assignment_date for r in kept] == [date(2026, 2, 10), date(2026, 2, 20)]
