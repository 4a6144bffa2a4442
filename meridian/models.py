"""
Result types returned by the engine.

All are frozen and transient: recomputed on every call, never cached.
`to_dict()` yields only primitives, lists and nested dicts so results can be
sent straight to a presentation layer or stored as an audit snapshot.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict, List


TREND_DIRECTIONS = ("improving", "declining", "stable")

INSIGHT_TYPES = (
    "burnout_risk",
    "performance_decline",
    "recovery_gap",
    "overwork_pattern",
    "skill_gap",
    "growth_opportunity",
)

SEVERITIES = ("low", "medium", "high", "critical")

METRIC_TRENDS = ("up", "down", "stable")


@dataclass(frozen=True)
class TrendAnalysis:
    metric: str
    current_value: float
    trend_direction: str
    trend_strength: float
    volatility: float
    change_rate: float
    prediction_next_week: float
    prediction_confidence: float

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class RelatedMetric:
    name: str
    value: float
    trend: str

    def __post_init__(self):
        if self.trend not in METRIC_TRENDS:
            raise ValueError(f"Invalid metric trend: {self.trend}")


@dataclass(frozen=True)
class PatternInsight:
    """A discrete, rule-triggered finding with its supporting evidence."""

    id: str
    type: str
    severity: str
    title: str
    description: str
    confidence: float
    evidence: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    predicted_impact: str = ""
    timeframe: str = ""
    related_metrics: List[RelatedMetric] = field(default_factory=list)

    def __post_init__(self):
        if self.type not in INSIGHT_TYPES:
            raise ValueError(f"Invalid insight type: {self.type}")
        if self.severity not in SEVERITIES:
            raise ValueError(f"Invalid severity: {self.severity}")

    def to_dict(self) -> Dict:
        return asdict(self)


@dataclass(frozen=True)
class BurnoutPrediction:
    risk_level: str
    probability: float
    contributing_factors: List[str] = field(default_factory=list)
    protective_factors: List[str] = field(default_factory=list)
    timeline_weeks: int = 12
    early_warning_signs: List[str] = field(default_factory=list)
    intervention_recommendations: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.risk_level not in SEVERITIES:
            raise ValueError(f"Invalid risk level: {self.risk_level}")

    def to_dict(self) -> Dict:
        return asdict(self)
