"""
Centralized configuration for all thresholds, windows, and risk points.

Every tunable constant lives here. The four pattern rules and the burnout
predictor read their cutoffs from these tables so each rule can be audited
and tested in isolation.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List


# ---------------------------------------------------------------------------
# Trend analysis
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TrendParams:
    """Windows and cutoffs for single-metric trend analysis."""

    min_data_points: int = 5
    recent_window: int = 8
    earlier_window: int = 8

    # |change_rate| below this is "stable"
    stable_band_pct: float = 5.0

    # strength = min(cap, |change_rate| * multiplier)
    strength_multiplier: float = 3.0
    strength_cap: float = 100.0

    volatility_cap: float = 100.0
    confidence_floor: float = 50.0

    def __post_init__(self):
        if self.recent_window < 2:
            raise ValueError(f"recent_window must be >= 2, got {self.recent_window}")
        if self.min_data_points < 1:
            raise ValueError(f"min_data_points must be >= 1, got {self.min_data_points}")


# ---------------------------------------------------------------------------
# Pattern rule thresholds
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BurnoutRuleThresholds:
    """Burnout risk rule: sustained high strain with low recovery."""

    window: int = 10
    trend_window: int = 5
    high_strain: float = 0.7
    low_recovery: float = 0.3
    confidence: float = 85.0

    def __post_init__(self):
        if self.trend_window < 2:
            raise ValueError(f"trend_window must be >= 2, got {self.trend_window}")


@dataclass(frozen=True)
class PerformanceDeclineThresholds:
    """ERI decline between the last window and the one before it."""

    window: int = 8
    min_points: int = 5
    decline_pct: float = 10.0
    high_severity_pct: float = 20.0
    confidence_multiplier: float = 3.0
    confidence_cap: float = 90.0

    # ERI below this counts as a below-threshold assignment in the evidence
    eri_floor: float = 60.0


@dataclass(frozen=True)
class RecoveryGapThresholds:
    """Consecutive assignments with insufficient recovery."""

    low_recovery: float = 0.4
    min_streak: int = 3
    high_severity_streak: int = 5
    confidence_per_assignment: float = 15.0
    confidence_cap: float = 85.0

    # Weekly cadence assumption used to turn a streak into days
    days_per_assignment: int = 7
    top_actions: int = 3


@dataclass(frozen=True)
class FrequencyThresholds:
    """Assignment density bands, in average days between assignments."""

    high_risk_gap_days: float = 2.0
    medium_risk_gap_days: float = 4.0
    recent_tail: int = 4

    # confidence = clamp(0, cap, (baseline - avg_gap) * multiplier)
    confidence_baseline_days: float = 4.0
    confidence_multiplier: float = 20.0
    confidence_cap: float = 90.0

    def __post_init__(self):
        if self.high_risk_gap_days > self.medium_risk_gap_days:
            raise ValueError(
                "high_risk_gap_days must not exceed medium_risk_gap_days, "
                f"got {self.high_risk_gap_days} > {self.medium_risk_gap_days}"
            )


# ---------------------------------------------------------------------------
# Burnout prediction (additive points)
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BurnoutPredictionParams:
    """Points table and bands for the additive burnout risk score."""

    window: int = 12
    min_records: int = 8
    trend_window: int = 6

    # Strain
    high_strain: float = 0.7
    moderate_strain: float = 0.5
    high_strain_points: int = 30
    moderate_strain_points: int = 15

    # Recovery
    low_recovery: float = 0.3
    suboptimal_recovery: float = 0.5
    low_recovery_points: int = 25
    suboptimal_recovery_points: int = 10

    # Trends (mean first difference)
    rising_strain_trend: float = 0.1
    rising_strain_points: int = 20
    falling_recovery_trend: float = -0.1
    falling_recovery_points: int = 15

    # Frequency of bad assignments within the window
    high_strain_share: float = 0.6
    high_strain_share_points: int = 15
    low_recovery_share: float = 0.4
    low_recovery_share_points: int = 10

    # Warning signs / interventions
    warning_strain: float = 0.6
    warning_recovery: float = 0.4

    # Risk bands (probability lower bounds)
    critical_at: float = 70.0
    high_at: float = 50.0
    medium_at: float = 30.0

    timeline_weeks: Dict[str, int] = field(
        default_factory=lambda: {"critical": 2, "high": 4, "medium": 8, "low": 12}
    )

    def __post_init__(self):
        if not (self.critical_at > self.high_at > self.medium_at >= 0):
            raise ValueError(
                "Risk bands must be strictly descending: "
                f"critical={self.critical_at}, high={self.high_at}, medium={self.medium_at}"
            )
        if self.min_records > self.window:
            raise ValueError(
                f"min_records ({self.min_records}) cannot exceed window ({self.window})"
            )
        missing = {"critical", "high", "medium", "low"} - set(self.timeline_weeks)
        if missing:
            raise ValueError(f"timeline_weeks missing risk levels: {missing}")


# ---------------------------------------------------------------------------
# Look-back window (consumed by the data-fetch layer, not the engine)
# ---------------------------------------------------------------------------

LOOKBACK_WEEKS = {
    "4w": 4,
    "8w": 8,
    "12w": 12,
    "26w": 26,
}

DEFAULT_LOOKBACK = "8w"


def lookback_start(window: str, today: date) -> date:
    """First calendar day included by a look-back window ending at `today`."""
    if window not in LOOKBACK_WEEKS:
        raise ValueError(
            f"Unknown look-back window {window!r}; expected one of {sorted(LOOKBACK_WEEKS)}"
        )
    return today - timedelta(weeks=LOOKBACK_WEEKS[window])


def within_lookback(records: Iterable, window: str, today: date) -> List:
    """Return the records dated on or after the window start, order preserved."""
    start = lookback_start(window, today)
    return [r for r in records if r.assignment_date >= start]


# ---------------------------------------------------------------------------
# Top-level config aggregate
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MeridianConfig:
    """Complete engine configuration. Pass to any entry point to override defaults."""

    trend: TrendParams = field(default_factory=TrendParams)
    burnout_rule: BurnoutRuleThresholds = field(default_factory=BurnoutRuleThresholds)
    performance: PerformanceDeclineThresholds = field(
        default_factory=PerformanceDeclineThresholds
    )
    recovery_gap: RecoveryGapThresholds = field(default_factory=RecoveryGapThresholds)
    frequency: FrequencyThresholds = field(default_factory=FrequencyThresholds)
    prediction: BurnoutPredictionParams = field(default_factory=BurnoutPredictionParams)
