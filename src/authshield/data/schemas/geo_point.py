"""Geolocation schema - one recorded location observation for a user."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class GeoPoint(BaseModel):
    """A location observation.

    Append-only: once recorded a point is never modified. History is read
    newest first by ``recorded_at``.
    """

    user_id: str = Field(..., description="Owning user identifier")
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    city: Optional[str] = Field(default=None, description="City name")
    country: Optional[str] = Field(default=None, description="Country name or code")
    ip_address: str = Field(default="", description="Client IP address")
    session_id: Optional[str] = Field(default=None)
    recorded_at: Optional[datetime] = Field(
        default=None,
        description="UTC timestamp of the observation",
    )
    risk_score: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Impossible-travel risk attached when the point was recorded",
    )

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "user_id": "user_abc123",
                "latitude": 40.7128,
                "longitude": -74.0060,
                "city": "New York",
                "country": "US",
                "ip_address": "192.168.1.100",
                "recorded_at": "2026-01-25T14:30:00Z",
                "risk_score": 0.0,
            }
        },
    }

    @field_validator("recorded_at")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        # Naive timestamps are taken to be UTC
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
