"""Weighted review scoring.

Advisory input for the reviewer's decision; it never drives a status
transition by itself.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from ..models.review_score import ReviewScore, ReviewVerdict
from .weights import DEFAULT_WEIGHTS, ReviewWeights

# Two-decimal quantizer, half away from zero
_TWO_PLACES = Decimal("0.01")

DEFAULT_MIN_SCORE = 70.0

# (lower bound inclusive, label), checked top-down
CATEGORY_THRESHOLDS = (
    (85.0, "Sangat Baik"),
    (70.0, "Baik"),
    (55.0, "Cukup"),
    (40.0, "Kurang"),
)
LOWEST_CATEGORY = "Sangat Kurang"


def _round2(value: float) -> float:
    return float(Decimal(repr(value)).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


class ReviewScorer:
    def __init__(self, weights: ReviewWeights = DEFAULT_WEIGHTS, min_score: float = DEFAULT_MIN_SCORE) -> None:
        self.weights = weights
        self.min_score = min_score

    def weighted_score(self, scores: ReviewScore) -> float:
        """Dot product of criterion scores and weights, rounded to 2 places."""
        w = self.weights
        raw = (
            scores.originality * w.originality
            + scores.methodology * w.methodology
            + scores.feasibility * w.feasibility
            + scores.impact * w.impact
        )
        return _round2(raw)

    @staticmethod
    def category(score: float) -> str:
        for lower_bound, label in CATEGORY_THRESHOLDS:
            if score >= lower_bound:
                return label
        return LOWEST_CATEGORY

    def is_eligible_for_funding(self, score: float, min_score: Optional[float] = None) -> bool:
        threshold = self.min_score if min_score is None else min_score
        return score >= threshold

    def evaluate(self, scores: ReviewScore) -> ReviewVerdict:
        """Score, categorize and check funding eligibility in one call."""
        score = self.weighted_score(scores)
        return ReviewVerdict(
            score=score,
            category=self.category(score),
            eligible_for_funding=self.is_eligible_for_funding(score),
            min_score=self.min_score,
            weights_version=self.weights.version,
        )
