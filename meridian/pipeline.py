"""
Pipeline orchestration: validate → sort → trends / patterns / prediction → report.

Entry points are pure functions of the record list. Analytical logic is
delegated to signals, detectors and burnout; this module only validates the
boundary, wires configuration through, and formats results.
"""

import logging
from typing import Dict, Iterable, List, Optional

from meridian.burnout import predict_burnout_risk
from meridian.config import MeridianConfig
from meridian.detectors import run_rules
from meridian.models import BurnoutPrediction, PatternInsight, TrendAnalysis
from meridian.records import RecordLike, coerce_records
from meridian.signals import compute_metric_trends

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public Entry Points
# ---------------------------------------------------------------------------

def analyze_trends(
    records: Iterable[RecordLike],
    cfg: MeridianConfig | None = None,
) -> List[TrendAnalysis]:
    """One TrendAnalysis per tracked metric (ERI, strain, recovery)."""
    if cfg is None:
        cfg = MeridianConfig()
    return compute_metric_trends(coerce_records(records), cfg)


def detect_patterns(
    records: Iterable[RecordLike],
    cfg: MeridianConfig | None = None,
) -> List[PatternInsight]:
    """Run the four pattern rules; zero or more insights."""
    if cfg is None:
        cfg = MeridianConfig()
    return run_rules(coerce_records(records), cfg)


def predict_burnout(
    records: Iterable[RecordLike],
    cfg: MeridianConfig | None = None,
) -> Optional[BurnoutPrediction]:
    """Burnout risk over the most recent assignments, or None if too few."""
    if cfg is None:
        cfg = MeridianConfig()
    return predict_burnout_risk(coerce_records(records), cfg)


def analyze_data(
    records: Iterable[RecordLike],
    cfg: MeridianConfig | None = None,
) -> Dict:
    """
    Backend / UI integration entry point.

    Validates once and runs all three analyses. The result holds only
    primitives, lists and dicts.
    """
    if cfg is None:
        cfg = MeridianConfig()

    rows = coerce_records(records)
    logger.debug("analyzing %d assignment records", len(rows))

    prediction = predict_burnout_risk(rows, cfg)

    return {
        "record_count": len(rows),
        "trends": [t.to_dict() for t in compute_metric_trends(rows, cfg)],
        "insights": [i.to_dict() for i in run_rules(rows, cfg)],
        "burnout_prediction": prediction.to_dict() if prediction else None,
    }


# ---------------------------------------------------------------------------
# Report generation
# ---------------------------------------------------------------------------

def generate_report(result: Dict) -> str:
    """Format an analyze_data result as a human-readable text report."""
    lines = [
        "MERIDIAN STATUS REPORT",
        "=" * 58,
        "",
        f"  Assignments analyzed : {result['record_count']}",
        "",
        "  Trends:",
    ]

    if not result["trends"]:
        lines.append("    (no data)")
    for t in result["trends"]:
        lines.append(
            f"    {t['metric']:24s} : {t['trend_direction']:10s}"
            f" (change: {t['change_rate']:+.1f}%, confidence: {t['prediction_confidence']:.0f})"
        )

    lines.append("")
    if result["insights"]:
        lines.append("  Patterns Detected:")
        for insight in result["insights"]:
            lines.append(
                f"    - [{insight['severity'].upper()}] {insight['title']}"
                f" (confidence: {insight['confidence']:.0f})"
            )
            for item in insight["evidence"]:
                lines.append(f"        · {item}")
    else:
        lines.append("  Patterns Detected: none")

    prediction = result["burnout_prediction"]
    lines.append("")
    if prediction is None:
        lines.append("  Burnout Risk        : insufficient data")
    else:
        lines.append(
            f"  Burnout Risk        : {prediction['risk_level'].upper()}"
            f" ({prediction['probability']:.0f}%, ~{prediction['timeline_weeks']} weeks)"
        )
        for factor in prediction["contributing_factors"]:
            lines.append(f"    + {factor}")
        for factor in prediction["protective_factors"]:
            lines.append(f"    - {factor}")

    lines.append("")
    lines.append("=" * 58)
    return "\n".join(lines)
