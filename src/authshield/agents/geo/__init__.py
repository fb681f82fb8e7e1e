"""Geo-Velocity Detector - module init."""

from authshield.agents.geo.agent import (
    GeoVelocityDetector,
    detect_impossible_travel,
    haversine_km,
)
from authshield.agents.geo.schema import ImpossibleTravelVerdict

__all__ = [
    "GeoVelocityDetector",
    "ImpossibleTravelVerdict",
    "detect_impossible_travel",
    "haversine_km",
]
