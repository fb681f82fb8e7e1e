"""Core types."""

from authshield.core.types import (
    Recommendation,
    ConfidenceLevel,
    Severity,
    AlertType,
    clamp01,
    tier,
)

__all__ = [
    "Recommendation",
    "ConfidenceLevel",
    "Severity",
    "AlertType",
    "clamp01",
    "tier",
]
