"""Scoring agents for AuthShield."""

from authshield.agents.behavior.agent import AnomalyScorer
from authshield.agents.trust.agent import TrustAggregator
from authshield.agents.geo.agent import GeoVelocityDetector

__all__ = [
    "AnomalyScorer",
    "TrustAggregator",
    "GeoVelocityDetector",
]
