"""
Burnout risk prediction from the most recent assignments.

Additive point scoring, not a probabilistic model: each threshold that fires
adds a fixed number of points and names itself as a contributing factor, so
every score can be explained line by line.
"""

import logging
from typing import List, Optional

from meridian.config import BurnoutPredictionParams, MeridianConfig
from meridian.models import BurnoutPrediction
from meridian.records import AssignmentRecord, metric_series
from meridian.signals import mean_first_difference

logger = logging.getLogger(__name__)


def classify_risk(probability: float, bp: BurnoutPredictionParams) -> str:
    """First match wins, highest band first."""
    if probability >= bp.critical_at:
        return "critical"
    if probability >= bp.high_at:
        return "high"
    if probability >= bp.medium_at:
        return "medium"
    return "low"


def score_risk(
    avg_strain: float,
    avg_recovery: float,
    strain_trend: float,
    recovery_trend: float,
    high_strain_share: float,
    low_recovery_share: float,
    bp: BurnoutPredictionParams,
):
    """
    Sum risk points for the fired thresholds.

    Returns:
        (raw_points, contributing_factors, protective_factors)
    """
    points = 0
    contributing: List[str] = []
    protective: List[str] = []

    if avg_strain > bp.high_strain:
        points += bp.high_strain_points
        contributing.append("High average strain levels")
    elif avg_strain > bp.moderate_strain:
        points += bp.moderate_strain_points
        contributing.append("Moderate strain levels")
    else:
        protective.append("Healthy strain levels")

    if avg_recovery < bp.low_recovery:
        points += bp.low_recovery_points
        contributing.append("Insufficient recovery activities")
    elif avg_recovery < bp.suboptimal_recovery:
        points += bp.suboptimal_recovery_points
        contributing.append("Suboptimal recovery")
    else:
        protective.append("Good recovery practices")

    if strain_trend > bp.rising_strain_trend:
        points += bp.rising_strain_points
        contributing.append("Increasing strain trend")
    if recovery_trend < bp.falling_recovery_trend:
        points += bp.falling_recovery_points
        contributing.append("Declining recovery trend")

    if high_strain_share > bp.high_strain_share:
        points += bp.high_strain_share_points
        contributing.append("Frequent high-strain assignments")
    if low_recovery_share > bp.low_recovery_share:
        points += bp.low_recovery_share_points
        contributing.append("Consistent low recovery scores")

    return points, contributing, protective


def predict_burnout_risk(
    records: List[AssignmentRecord],
    cfg: MeridianConfig,
) -> Optional[BurnoutPrediction]:
    """
    Score the last `window` assignments. Returns None below `min_records`.
    """
    bp = cfg.prediction
    recent = records[-bp.window:]

    if len(recent) < bp.min_records:
        logger.debug(
            "burnout prediction skipped: %d of %d required records",
            len(recent), bp.min_records,
        )
        return None

    strain = metric_series(recent, "post_strain_score")
    recovery = metric_series(recent, "recovery_reflection_score")

    avg_strain = float(strain.mean())
    avg_recovery = float(recovery.mean())
    strain_trend = mean_first_difference(strain, bp.trend_window)
    recovery_trend = mean_first_difference(recovery, bp.trend_window)

    points, contributing, protective = score_risk(
        avg_strain=avg_strain,
        avg_recovery=avg_recovery,
        strain_trend=strain_trend,
        recovery_trend=recovery_trend,
        high_strain_share=float((strain > bp.high_strain).mean()),
        low_recovery_share=float((recovery < bp.low_recovery).mean()),
        bp=bp,
    )

    probability = max(0, min(100, points))
    risk_level = classify_risk(probability, bp)

    warning_signs = []
    if risk_level != "low":
        warning_signs.append("Declining performance metrics")
    if avg_strain > bp.warning_strain:
        warning_signs.append("Increased assignment strain")
    if avg_recovery < bp.warning_recovery:
        warning_signs.append("Reduced recovery activities")
    if strain_trend > 0:
        warning_signs.append("Worsening strain patterns")
    if recovery_trend < 0:
        warning_signs.append("Declining recovery practices")

    interventions = []
    if risk_level == "critical":
        interventions.append("Immediate workload reduction")
        interventions.append("Professional consultation recommended")
    if avg_strain > bp.warning_strain:
        interventions.append("Implement stress management protocols")
    if avg_recovery < bp.warning_recovery:
        interventions.append("Increase recovery time between assignments")
    if strain_trend > 0:
        interventions.append("Review assignment complexity")
    if recovery_trend < 0:
        interventions.append("Enhance recovery practices")
    interventions.append("Regular monitoring and check-ins")
    interventions.append("Consider peer support or supervision")

    logger.debug(
        "burnout prediction: points=%d probability=%d level=%s", points, probability, risk_level
    )

    return BurnoutPrediction(
        risk_level=risk_level,
        probability=probability,
        contributing_factors=contributing,
        protective_factors=protective,
        timeline_weeks=bp.timeline_weeks[risk_level],
        early_warning_signs=warning_signs,
        intervention_recommendations=interventions,
    )
