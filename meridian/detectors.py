"""
Pattern detectors: burnout risk, performance decline, recovery gap, overwork.

Each rule is a pure function over the sorted record list that returns one
PatternInsight or None. run_rules evaluates them in a fixed order.
"""

import logging
from typing import List, Optional

from meridian.config import MeridianConfig
from meridian.frequency import analyze_frequency
from meridian.models import PatternInsight, RelatedMetric
from meridian.records import AssignmentRecord, metric_series
from meridian.signals import mean_first_difference
from meridian.streaks import longest_run

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Burnout risk
# ---------------------------------------------------------------------------

def detect_burnout_risk(
    records: List[AssignmentRecord],
    cfg: MeridianConfig,
) -> Optional[PatternInsight]:
    """
    Fire when, over the last `window` assignments:
        - average strain is above high_strain
        - average recovery is below low_recovery
        - strain is still climbing (mean step over the last trend_window > 0)
    """
    bt = cfg.burnout_rule
    recent = records[-bt.window:]
    if not recent:
        return None

    strain = metric_series(recent, "post_strain_score")
    recovery = metric_series(recent, "recovery_reflection_score")

    avg_strain = float(strain.mean())
    avg_recovery = float(recovery.mean())
    strain_trend = mean_first_difference(strain, bt.trend_window)

    if not (avg_strain > bt.high_strain and avg_recovery < bt.low_recovery and strain_trend > 0):
        return None

    high_strain_count = int((strain > bt.high_strain).sum())
    high_strain_share = high_strain_count / len(recent) * 100

    logger.debug(
        "burnout_risk fired: avg_strain=%.3f avg_recovery=%.3f strain_trend=%.3f",
        avg_strain, avg_recovery, strain_trend,
    )

    return PatternInsight(
        id="burnout_risk_001",
        type="burnout_risk",
        severity="high",
        title="High Burnout Risk Detected",
        description=(
            "Recent assignments show high strain with low recovery, "
            "indicating potential burnout risk."
        ),
        confidence=bt.confidence,
        evidence=[
            f"Average strain score: {avg_strain * 100:.1f}% (High)",
            f"Average recovery: {avg_recovery * 100:.1f}% (Low)",
            "Strain trend: Increasing",
            f"{high_strain_count} of last {len(recent)} assignments with high strain",
        ],
        recommendations=[
            "Implement immediate stress reduction protocols",
            "Reduce assignment complexity temporarily",
            "Increase recovery activities between assignments",
            "Consider professional support or counseling",
            "Monitor closely for next 2-3 weeks",
        ],
        predicted_impact=(
            "Without intervention, burnout risk may increase to critical "
            "levels within 3-4 weeks"
        ),
        timeframe="Immediate action recommended",
        related_metrics=[
            RelatedMetric("Avg Strain", avg_strain * 100, "up"),
            RelatedMetric("Avg Recovery", avg_recovery * 100, "down"),
            RelatedMetric("High Strain Assignments", high_strain_share, "up"),
        ],
    )


# ---------------------------------------------------------------------------
# Performance decline
# ---------------------------------------------------------------------------

def detect_performance_decline(
    records: List[AssignmentRecord],
    cfg: MeridianConfig,
) -> Optional[PatternInsight]:
    """Compare mean ERI of the last `window` assignments with the prior `window`."""
    pt = cfg.performance
    eri = metric_series(records, "eri_assign_score")

    recent = eri[-pt.window:]
    earlier = eri[-2 * pt.window:-pt.window]

    if len(recent) < pt.min_points or len(earlier) < pt.min_points:
        return None

    recent_avg = float(recent.mean())
    earlier_avg = float(earlier.mean())
    if earlier_avg == 0.0:
        return None

    decline = (earlier_avg - recent_avg) / earlier_avg * 100
    if decline <= pt.decline_pct:
        return None

    below_floor = int((recent < pt.eri_floor).sum())
    severity = "high" if decline > pt.high_severity_pct else "medium"

    logger.debug("performance_decline fired: decline=%.1f%% severity=%s", decline, severity)

    recommendations = [
        "Review recent assignment types and complexity",
        "Assess external stressors or life changes",
        "Consider workload adjustment",
        "Focus on preparation and recovery protocols",
        "Seek peer support or supervision",
    ]

    return PatternInsight(
        id="performance_decline_001",
        type="performance_decline",
        severity=severity,
        title="Performance Decline Detected",
        description=(
            f"ERI scores have declined by {decline:.1f}% over the past "
            f"{len(recent)} assignments."
        ),
        confidence=min(pt.confidence_cap, decline * pt.confidence_multiplier),
        evidence=[
            f"Previous {len(earlier)}-assignment average: {earlier_avg:.1f}",
            f"Recent {len(recent)}-assignment average: {recent_avg:.1f}",
            f"Decline rate: {decline:.1f}%",
            f"{below_floor} recent assignments below threshold",
        ],
        recommendations=recommendations,
        predicted_impact=(
            "Continued decline may lead to increased error rates and "
            "reduced job satisfaction"
        ),
        timeframe="Review within 1-2 weeks",
        related_metrics=[
            RelatedMetric("ERI Trend", recent_avg, "down"),
            RelatedMetric("Decline Rate", decline, "up"),
            RelatedMetric("Below Threshold", below_floor / len(recent) * 100, "up"),
        ],
    )


# ---------------------------------------------------------------------------
# Recovery gap
# ---------------------------------------------------------------------------

def detect_recovery_gap(
    records: List[AssignmentRecord],
    cfg: MeridianConfig,
) -> Optional[PatternInsight]:
    """Longest run of assignments with recovery below low_recovery."""
    rt = cfg.recovery_gap

    streak = longest_run(
        records,
        predicate=lambda r: r.recovery_reflection_score < rt.low_recovery,
        value_of=lambda r: r.recovery_reflection_score,
        days_per_record=rt.days_per_assignment,
        top_actions=rt.top_actions,
    )
    count = streak["count"]
    if count < rt.min_streak:
        return None

    severity = "high" if count > rt.high_severity_streak else "medium"
    actions = ", ".join(streak["common_actions"]) or "none recorded"

    logger.debug("recovery_gap fired: streak=%d severity=%s", count, severity)

    return PatternInsight(
        id="recovery_gap_001",
        type="recovery_gap",
        severity=severity,
        title="Recovery Gap Pattern",
        description=f"{count} consecutive assignments with insufficient recovery activities.",
        confidence=min(rt.confidence_cap, count * rt.confidence_per_assignment),
        evidence=[
            f"Consecutive low recovery: {count} assignments",
            f"Average recovery score: {streak['mean_value'] * 100:.1f}%",
            f"Recovery actions used: {actions}",
            f"Time span: {streak['time_span_days']} days",
        ],
        recommendations=[
            "Implement structured recovery protocols",
            "Schedule dedicated recovery time between assignments",
            "Explore new recovery techniques",
            "Consider assignment spacing adjustments",
            "Monitor energy levels and fatigue patterns",
        ],
        predicted_impact=(
            "Recovery gaps may lead to cumulative fatigue and reduced "
            "performance quality"
        ),
        timeframe="Address within 1 week",
        related_metrics=[
            RelatedMetric("Recovery Score", streak["mean_value"] * 100, "down"),
            RelatedMetric("Consecutive Low", float(count), "up"),
            RelatedMetric("Recovery Actions", float(streak["action_variety"]), "down"),
        ],
    )


# ---------------------------------------------------------------------------
# Overwork
# ---------------------------------------------------------------------------

def detect_overwork(
    records: List[AssignmentRecord],
    cfg: MeridianConfig,
) -> Optional[PatternInsight]:
    """Fire when assignment density is in the high-risk band."""
    freq = analyze_frequency(records, cfg.frequency)
    if freq["risk_level"] != "high":
        return None

    avg_gap = freq["avg_days_between"]

    logger.debug("overwork_pattern fired: avg_days_between=%.2f", avg_gap)

    return PatternInsight(
        id="overwork_pattern_001",
        type="overwork_pattern",
        severity="high",
        title="High Assignment Frequency",
        description=(
            f"Assignments are occurring too frequently ({avg_gap:.1f} days average gap)."
        ),
        confidence=freq["confidence"],
        evidence=[
            f"Average days between assignments: {avg_gap:.1f}",
            f"Recent assignment count: {freq['recent_count']}",
            f"Weekend/overtime assignments: {freq['weekend_count']}",
            f"Peak frequency: {freq['peak_frequency']} assignments per week",
        ],
        recommendations=[
            "Implement mandatory rest periods",
            "Review assignment scheduling practices",
            "Consider workload redistribution",
            "Establish minimum recovery time standards",
            "Monitor for signs of overwork",
        ],
        predicted_impact="Sustained high frequency may lead to burnout and quality degradation",
        timeframe="Immediate scheduling review needed",
        related_metrics=[
            RelatedMetric("Days Between", avg_gap, "down"),
            RelatedMetric("Recent Count", float(freq["recent_count"]), "up"),
            RelatedMetric("Weekend Work", float(freq["weekend_count"]), "up"),
        ],
    )


# ---------------------------------------------------------------------------
# Rule runner
# ---------------------------------------------------------------------------

RULES: tuple = (
    detect_burnout_risk,
    detect_performance_decline,
    detect_recovery_gap,
    detect_overwork,
)


def run_rules(
    records: List[AssignmentRecord],
    cfg: MeridianConfig,
    rules: tuple = RULES,
) -> List[PatternInsight]:
    """Evaluate each rule independently; a rule contributes at most one insight."""
    insights: List[PatternInsight] = []
    for rule in rules:
        insight = rule(records, cfg)
        if insight is not None:
            insights.append(insight)
    return insights
