"""Core scoring components for the scouting engine."""
from draft_scout.services.scorers.attribute_estimator import AttributeEstimator, EstimatedAttributes
from draft_scout.services.scorers.confidence_scorer import (
    AggregatedConfidence,
    ConfidenceImprovement,
    ConfidenceScorer,
)

__all__ = [
    "AttributeEstimator",
    "EstimatedAttributes",
    "AggregatedConfidence",
    "ConfidenceImprovement",
    "ConfidenceScorer",
]
