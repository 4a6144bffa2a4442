"""
MERIDIAN v1.0 - Behavioral-Analytics Engine for Interpreter Wellness

Turns a time-ordered series of per-assignment self-report scores into
trend analyses, rule-triggered pattern insights, and a burnout-risk
prediction. Deterministic, explainable, and fully stateless.

Architecture:
    config      - All thresholds, windows, and risk points (single source of truth)
    records     - AssignmentRecord, boundary validation, metric series
    models      - Result types (TrendAnalysis, PatternInsight, BurnoutPrediction)
    signals     - Trend direction, strength, volatility, change rate
    streaks     - Longest run of records matching a predicate
    frequency   - Assignment gaps and density risk
    detectors   - Pattern rules (burnout risk, decline, recovery gap, overwork)
    burnout     - Additive burnout risk prediction
    pipeline    - Entry points and text report

Public API:
    analyze_trends(records)    → list[TrendAnalysis]
    detect_patterns(records)   → list[PatternInsight]
    predict_burnout(records)   → BurnoutPrediction | None
    analyze_data(records)      → dict (all three, JSON-ready)
    generate_report(result)    → formatted report
"""

from meridian.config import MeridianConfig
from meridian.models import BurnoutPrediction, PatternInsight, RelatedMetric, TrendAnalysis
from meridian.pipeline import (
    analyze_data,
    analyze_trends,
    detect_patterns,
    generate_report,
    predict_burnout,
)
from meridian.records import AssignmentRecord, RecordValidationError

__version__ = "1.0.0"

__all__ = [
    "AssignmentRecord",
    "BurnoutPrediction",
    "MeridianConfig",
    "PatternInsight",
    "RecordValidationError",
    "RelatedMetric",
    "TrendAnalysis",
    "analyze_data",
    "analyze_trends",
    "detect_patterns",
    "generate_report",
    "predict_burnout",
]
