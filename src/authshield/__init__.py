"""AuthShield - continuous authentication risk scoring."""

__version__ = "0.1.0"
__author__ = "AuthShield Team"

# Core exports
from authshield.models.behavior.baseline import build_baseline
from authshield.agents.behavior.agent import score_behavior
from authshield.agents.trust.agent import aggregate_trust
from authshield.agents.geo.agent import detect_impossible_travel
from authshield.core.types import Recommendation, ConfidenceLevel, Severity

__all__ = [
    "build_baseline",
    "score_behavior",
    "aggregate_trust",
    "detect_impossible_travel",
    "Recommendation",
    "ConfidenceLevel",
    "Severity",
]
