"""Geo-Velocity Detector Output Schema."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from authshield.core.types import Severity
from authshield.data.schemas.geo_point import GeoPoint


class ImpossibleTravelVerdict(BaseModel):
    """Outcome of comparing a new location with the previous one.

    distance_km, time_delta_hours and required_speed_kmh are None when no
    usable previous location existed (insufficient data, not an error).
    required_speed_kmh is +inf when no time elapsed at all.
    """

    user_id: str
    impossible_travel: bool = Field(default=False)
    distance_km: Optional[float] = Field(default=None, ge=0.0)
    time_delta_hours: Optional[float] = Field(default=None, ge=0.0)
    required_speed_kmh: Optional[float] = Field(default=None, ge=0.0)
    risk_score: float = Field(default=0.0, ge=0.0, le=1.0)
    severity: Optional[Severity] = Field(
        default=None,
        description="critical or high; set only when impossible travel is flagged"
    )
    previous_point: Optional[GeoPoint] = None
    current_point: GeoPoint
    factors: Dict[str, Any] = Field(default_factory=dict)

    @property
    def has_prior_location(self) -> bool:
        return self.distance_km is not None

    @property
    def time_delta_minutes(self) -> Optional[float]:
        if self.time_delta_hours is None:
            return None
        return self.time_delta_hours * 60.0
