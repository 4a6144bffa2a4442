"""
Signal extraction: window means, volatility, change rate and trend labels.

All functions are pure transforms over a single numeric sequence. They know
nothing about which metric they are looking at; callers that track a
"higher is worse" metric flip the direction label afterwards.
"""

from typing import Dict, List, Sequence, Tuple

import numpy as np

from meridian.config import MeridianConfig, TrendParams
from meridian.models import TrendAnalysis
from meridian.records import AssignmentRecord, metric_series


# ---------------------------------------------------------------------------
# Tracked metrics: (label, field, higher_is_worse)
# ---------------------------------------------------------------------------

TRACKED_METRICS: Tuple[Tuple[str, str, bool], ...] = (
    ("ERI Readiness Index", "eri_assign_score", False),
    ("Post-Assignment Strain", "post_strain_score", True),
    ("Recovery & Reflection", "recovery_reflection_score", False),
)

_INVERTED = {"improving": "declining", "declining": "improving", "stable": "stable"}


# ---------------------------------------------------------------------------
# Numeric primitives
# ---------------------------------------------------------------------------

def _mean(values: np.ndarray) -> float:
    if len(values) == 0:
        return 0.0
    return float(values.mean())


def relative_volatility(values: np.ndarray, cap: float = 100.0) -> float:
    """
    Coefficient of variation as a percentage, capped at `cap`.

    Uses population std (ddof=0) over |mean|, clamped to [0, cap]. Returns
    0.0 when the mean is zero.
    """
    if len(values) == 0:
        return 0.0
    mean = float(values.mean())
    if mean == 0.0:
        return 0.0
    std = float(np.std(values, ddof=0))
    return max(0.0, min(cap, std / abs(mean) * 100.0))


def percent_change(new: float, base: float) -> float:
    """(new - base) / base * 100, or 0.0 for a zero base."""
    if base == 0.0:
        return 0.0
    return (new - base) / base * 100.0


def mean_first_difference(values: Sequence[float], window: int) -> float:
    """
    Average step over the trailing `window` values.

    The divisor is fixed at window - 1 even when fewer values are available.
    Returns 0.0 with fewer than two values.
    """
    tail = np.asarray(values, dtype=np.float64)[-window:]
    if len(tail) < 2:
        return 0.0
    return float(np.diff(tail).sum() / (window - 1))


# ---------------------------------------------------------------------------
# Trend classification
# ---------------------------------------------------------------------------

def classify_change(change_rate: float, t: TrendParams) -> str:
    """Map a percent change to a direction label."""
    if abs(change_rate) < t.stable_band_pct:
        return "stable"
    if change_rate > t.stable_band_pct:
        return "improving"
    return "declining"


def analyze_trend(values: Sequence[float], t: TrendParams) -> Dict[str, float]:
    """
    Compare the recent window with the one before it.

    Returns:
        {"direction", "strength", "volatility", "change_rate",
         "prediction", "confidence"}
    """
    y = np.asarray(values, dtype=np.float64)

    if len(y) < t.min_data_points:
        return {
            "direction": "stable",
            "strength": 0.0,
            "volatility": 0.0,
            "change_rate": 0.0,
            "prediction": float(y[-1]) if len(y) else 0.0,
            "confidence": 0.0,
        }

    recent = y[-t.recent_window:]
    earlier = y[-(t.recent_window + t.earlier_window):-t.recent_window]

    recent_avg = _mean(recent)
    earlier_avg = _mean(earlier) if len(earlier) else recent_avg

    change_rate = percent_change(recent_avg, earlier_avg)
    volatility = relative_volatility(recent, t.volatility_cap)

    return {
        "direction": classify_change(change_rate, t),
        "strength": min(t.strength_cap, abs(change_rate) * t.strength_multiplier),
        "volatility": volatility,
        "change_rate": change_rate,
        # Linear extrapolation of the observed change onto the recent mean
        "prediction": recent_avg + (change_rate / 100.0) * recent_avg,
        "confidence": max(t.confidence_floor, 100.0 - volatility),
    }


# ---------------------------------------------------------------------------
# Per-metric trends
# ---------------------------------------------------------------------------

def compute_metric_trends(
    records: List[AssignmentRecord],
    cfg: MeridianConfig,
) -> List[TrendAnalysis]:
    """One TrendAnalysis per tracked metric. Empty input gives an empty list."""
    if not records:
        return []

    trends = []
    for label, field_name, higher_is_worse in TRACKED_METRICS:
        values = metric_series(records, field_name)
        fragment = analyze_trend(values, cfg.trend)

        direction = fragment["direction"]
        if higher_is_worse:
            direction = _INVERTED[direction]

        trends.append(TrendAnalysis(
            metric=label,
            current_value=float(values[-1]),
            trend_direction=direction,
            trend_strength=fragment["strength"],
            volatility=fragment["volatility"],
            change_rate=fragment["change_rate"],
            prediction_next_week=fragment["prediction"],
            prediction_confidence=fragment["confidence"],
        ))

    return trends
