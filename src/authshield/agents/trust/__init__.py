"""Trust Aggregator - module init."""

from authshield.agents.trust.agent import TrustAggregator, aggregate_trust
from authshield.agents.trust.schema import TrustComponents, TrustScore

__all__ = ["TrustAggregator", "TrustComponents", "TrustScore", "aggregate_trust"]
