"""
Assignment density: gaps between assignments and weekend work.
"""

from typing import Dict, List

from meridian.config import FrequencyThresholds
from meridian.records import AssignmentRecord, assignment_dates


SECONDS_PER_DAY = 86400.0


def classify_gap(avg_days_between: float, ft: FrequencyThresholds) -> str:
    """Map the average gap in days to a density risk level."""
    if avg_days_between < ft.high_risk_gap_days:
        return "high"
    if avg_days_between < ft.medium_risk_gap_days:
        return "medium"
    return "low"


def gap_confidence(avg_days_between: float, ft: FrequencyThresholds) -> float:
    """
    Confidence that the density reading is meaningful.

    (baseline - gap) * multiplier, capped at confidence_cap and floored at 0
    so sparse schedules read as "no signal" instead of a negative score.
    """
    raw = (ft.confidence_baseline_days - avg_days_between) * ft.confidence_multiplier
    return max(0.0, min(ft.confidence_cap, raw))


def analyze_frequency(
    records: List[AssignmentRecord],
    ft: FrequencyThresholds,
) -> Dict[str, object]:
    """
    Returns:
        {"avg_days_between", "recent_count", "weekend_count",
         "peak_frequency", "risk_level", "confidence"}

    avg_days_between is None when fewer than two records exist.
    """
    if len(records) < 2:
        return {
            "avg_days_between": None,
            "recent_count": len(records),
            "weekend_count": sum(1 for r in records if r.assignment_date.weekday() >= 5),
            "peak_frequency": len(records),
            "risk_level": "low",
            "confidence": 0.0,
        }

    dates = assignment_dates(records)

    # Tail slice, not a date range
    recent_count = len(records[-ft.recent_tail:])
    weekend_count = int((dates.dt.dayofweek >= 5).sum())

    gaps = dates.diff().dropna().dt.total_seconds() / SECONDS_PER_DAY

    avg_gap = float(gaps.mean())

    return {
        "avg_days_between": avg_gap,
        "recent_count": recent_count,
        "weekend_count": weekend_count,
        "peak_frequency": recent_count,
        "risk_level": classify_gap(avg_gap, ft),
        "confidence": gap_confidence(avg_gap, ft),
    }
