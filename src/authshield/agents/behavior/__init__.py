"""Anomaly Scorer - module init."""

from authshield.agents.behavior.agent import AnomalyScorer, score_behavior
from authshield.agents.behavior.schema import AnomalyFactor, AnomalyResult

__all__ = ["AnomalyScorer", "AnomalyFactor", "AnomalyResult", "score_behavior"]
