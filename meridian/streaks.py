"""
Longest-run detection over the assignment history.

A streak is a maximal block of consecutive records satisfying a predicate.
Stats for the best block are snapshotted when it ends, so the summary always
describes the records that actually formed the longest run.
"""

from collections import Counter
from typing import Callable, Dict, List

import numpy as np

from meridian.records import AssignmentRecord


def summarize_actions(records: List[AssignmentRecord], top: int = 3) -> Dict[str, object]:
    """
    Most frequent recovery-action labels and the count of distinct labels.

    Ties are broken by first appearance in chronological order.
    """
    counts: Counter = Counter()
    for r in records:
        counts.update(sorted(r.post_recovery_actions))
    return {
        "common_actions": [label for label, _ in counts.most_common(top)],
        "action_variety": len(counts),
    }


def longest_run(
    records: List[AssignmentRecord],
    predicate: Callable[[AssignmentRecord], bool],
    value_of: Callable[[AssignmentRecord], float],
    days_per_record: int = 7,
    top_actions: int = 3,
) -> Dict[str, object]:
    """
    Scan left to right for the longest run of records matching `predicate`.

    The earlier run wins a tie. time_span_days assumes a weekly assignment
    cadence (count * days_per_record) rather than measuring actual dates.

    Returns:
        {"count", "mean_value", "time_span_days",
         "common_actions", "action_variety"}
    """
    best: List[AssignmentRecord] = []
    current: List[AssignmentRecord] = []

    for record in records:
        if predicate(record):
            current.append(record)
            continue
        if len(current) > len(best):
            best = current
        current = []

    if len(current) > len(best):
        best = current

    values = np.array([value_of(r) for r in best], dtype=np.float64)
    summary = summarize_actions(best, top_actions)

    return {
        "count": len(best),
        "mean_value": float(values.mean()) if len(values) else 0.0,
        "time_span_days": len(best) * days_per_record,
        "common_actions": summary["common_actions"],
        "action_variety": summary["action_variety"],
    }
