"""
Assignment records: typed input, boundary validation, and metric extraction.

The data-loading layer hands over loosely-shaped rows (one per completed
assignment). They are validated once here and every downstream component
works on immutable, chronologically sorted AssignmentRecord instances.
"""

import math
import numbers
from collections import abc
from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import FrozenSet, Iterable, List, Mapping, Union

import numpy as np
import pandas as pd


NUMERIC_FIELDS = (
    "eri_assign_score",
    "pre_readiness_score",
    "post_strain_score",
    "recovery_reflection_score",
    "pre_emotional_state_score",
    "pre_cognitive_readiness_score",
    "pre_context_familiarity_score",
    "pre_role_clarity_score",
    "post_emotional_load_score",
    "post_cognitive_load_score",
    "post_meaning_challenge_score",
    "post_rolespace_challenge_score",
    "post_cultural_friction_score",
    "post_reflection_depth_self_score",
)


class RecordValidationError(ValueError):
    """Raised when an input row cannot be turned into an AssignmentRecord."""

    def __init__(self, field_name: str, message: str):
        self.field_name = field_name
        super().__init__(f"{field_name}: {message}")


@dataclass(frozen=True)
class AssignmentRecord:
    """One completed assignment. Scores are 0-1 except ERI (0-100)."""

    assignment_date: date
    eri_assign_score: float = 0.0
    pre_readiness_score: float = 0.0
    post_strain_score: float = 0.0
    recovery_reflection_score: float = 0.0
    pre_emotional_state_score: float = 0.0
    pre_cognitive_readiness_score: float = 0.0
    pre_context_familiarity_score: float = 0.0
    pre_role_clarity_score: float = 0.0
    post_emotional_load_score: float = 0.0
    post_cognitive_load_score: float = 0.0
    post_meaning_challenge_score: float = 0.0
    post_rolespace_challenge_score: float = 0.0
    post_cultural_friction_score: float = 0.0
    post_reflection_depth_self_score: float = 0.0
    post_recovery_actions: FrozenSet[str] = frozenset()

    def __post_init__(self):
        # Frozen: normalise through object.__setattr__
        object.__setattr__(self, "assignment_date", _check_date(self.assignment_date))
        for name in NUMERIC_FIELDS:
            object.__setattr__(self, name, _coerce_score(name, getattr(self, name)))
        object.__setattr__(
            self, "post_recovery_actions", _coerce_actions(self.post_recovery_actions)
        )

    @classmethod
    def from_dict(cls, data: Mapping) -> "AssignmentRecord":
        """
        Build a record from a mapping, filling missing scores with 0.0.

        Accepts ISO date strings. Unknown keys are ignored so rows can carry
        extra columns (user_id, ids).
        """
        if not isinstance(data, abc.Mapping):
            raise RecordValidationError(
                "record", f"expected a mapping, got {type(data).__name__}"
            )

        kwargs = {"assignment_date": _coerce_date(data.get("assignment_date"))}
        for name in NUMERIC_FIELDS:
            kwargs[name] = data.get(name)
        kwargs["post_recovery_actions"] = data.get("post_recovery_actions")
        return cls(**kwargs)

    def to_dict(self) -> dict:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["assignment_date"] = self.assignment_date.isoformat()
        out["post_recovery_actions"] = sorted(self.post_recovery_actions)
        return out


# ---------------------------------------------------------------------------
# Field coercion
# ---------------------------------------------------------------------------

def _check_date(value) -> date:
    """Accept date or datetime instances only; NaT is rejected."""
    if value is pd.NaT:
        raise RecordValidationError("assignment_date", "is missing (NaT)")
    # datetime is a date subclass; drop the time part for calendar arithmetic
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise RecordValidationError(
        "assignment_date", f"expected a date, got {type(value).__name__} ({value!r})"
    )


def _coerce_date(value) -> date:
    if value is None:
        raise RecordValidationError("assignment_date", "is required")
    if isinstance(value, str):
        try:
            parsed = pd.to_datetime(value)
        except (ValueError, TypeError) as e:
            raise RecordValidationError(
                "assignment_date", f"cannot parse {value!r}"
            ) from e
        if pd.isna(parsed):
            raise RecordValidationError("assignment_date", f"cannot parse {value!r}")
        return parsed.date()
    return _check_date(value)


def _coerce_score(name: str, value) -> float:
    if value is None:
        return 0.0
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise RecordValidationError(
            name, f"expected a number, got {type(value).__name__} ({value!r})"
        )
    value = float(value)
    if math.isnan(value):
        return 0.0
    if math.isinf(value):
        raise RecordValidationError(name, "must be finite")
    if value < 0:
        raise RecordValidationError(name, f"must be non-negative, got {value}")
    return value


def _coerce_actions(value) -> FrozenSet[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str) or not isinstance(value, abc.Iterable):
        raise RecordValidationError(
            "post_recovery_actions",
            f"expected a collection of labels, got {type(value).__name__}",
        )
    labels = list(value)
    bad = [label for label in labels if not isinstance(label, str)]
    if bad:
        raise RecordValidationError(
            "post_recovery_actions", f"labels must be strings, got {bad!r}"
        )
    return frozenset(labels)


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------

RecordLike = Union[AssignmentRecord, Mapping]


def coerce_records(records: Iterable[RecordLike]) -> List[AssignmentRecord]:
    """
    Validate and sort input rows by assignment_date.

    Returns a new list; the caller's sequence is never reordered. Sorting is
    stable, so same-day assignments keep their relative order.
    """
    if records is None:
        raise RecordValidationError("records", "expected an iterable, got None")

    out = []
    for row in records:
        if isinstance(row, AssignmentRecord):
            out.append(row)
        else:
            out.append(AssignmentRecord.from_dict(row))

    out.sort(key=lambda r: r.assignment_date)
    return out


def metric_series(records: List[AssignmentRecord], field_name: str) -> np.ndarray:
    """Project sorted records onto one numeric field, in chronological order."""
    if field_name not in NUMERIC_FIELDS:
        raise KeyError(f"Unknown metric field: {field_name}")
    return np.array([getattr(r, field_name) for r in records], dtype=np.float64)


def assignment_dates(records: List[AssignmentRecord]) -> pd.Series:
    """assignment_date of each record as a datetime64 Series, in record order."""
    return pd.to_datetime(pd.Series([r.assignment_date for r in records], dtype="object"))
