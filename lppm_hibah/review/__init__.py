"""Weighted review scoring for proposals."""

from .scorer import ReviewScorer
from .weights import DEFAULT_WEIGHTS, ReviewWeights, load_weights

__all__ = ["ReviewScorer", "DEFAULT_WEIGHTS", "ReviewWeights", "load_weights"]
