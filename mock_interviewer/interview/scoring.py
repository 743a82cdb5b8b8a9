"""
Score aggregation and summary statistics.
"""
import math
from typing import Dict, Iterable, List, Sequence, Tuple

from .models import Evaluation
from ..config import SCORE_LABELS, LOWEST_SCORE_LABEL
from ..errors import InvalidInput

METRICS = ("relevance", "clarity", "grammar", "confidence")


def clamp_score(value: float) -> float:
    """Clamp a sub-score into [0, 100]."""
    return max(0.0, min(100.0, float(value)))


def round_tenth(value: float) -> float:
    """Round to one decimal with ties going up, e.g. 62.25 -> 62.3."""
    return math.floor(value * 10 + 0.5) / 10


def answer_average(evaluation: Evaluation) -> float:
    """Mean of the four clamped sub-scores."""
    return sum(clamp_score(getattr(evaluation, m)) for m in METRICS) / len(METRICS)


def aggregate_score(evaluations: Sequence[Evaluation], penalty_percent: float) -> Tuple[float, float]:
    """
    Combine per-answer evaluations and the proctoring penalty.

    Returns:
        (overall_score, score_before_penalty). overall_score is
        max(0, mean - penalty) rounded to one decimal.

    Raises:
        InvalidInput: no evaluations, or a negative penalty
    """
    if not evaluations:
        raise InvalidInput("Cannot score an interview with no evaluations")
    if penalty_percent < 0:
        raise InvalidInput(f"Penalty must be non-negative, got {penalty_percent}")

    before = sum(answer_average(e) for e in evaluations) / len(evaluations)
    overall = round_tenth(max(0.0, before - penalty_percent))
    return overall, before


def skill_averages(score_rows: Iterable[Dict[str, float]]) -> Dict[str, float]:
    """Per-metric mean over score dicts keyed by METRICS; zeros when empty."""
    rows = list(score_rows)
    if not rows:
        return {m: 0.0 for m in METRICS}
    return {m: sum(float(r.get(m, 0) or 0) for r in rows) / len(rows) for m in METRICS}


def average_overall(scores: List[float]) -> float:
    if not scores:
        return 0.0
    return round_tenth(sum(scores) / len(scores))


def score_label(score: float) -> str:
    for threshold, label in SCORE_LABELS:
        if score >= threshold:
            return label
    return LOWEST_SCORE_LABEL
