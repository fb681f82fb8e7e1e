"""Behavioral sample schema - one interaction window of biometric features."""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from pydantic import AliasChoices, BaseModel, Field


class BehavioralFeature(str, Enum):
    """The seven tracked behavioral features."""
    MOUSE_VELOCITY = "mouse_velocity"
    MOUSE_ACCELERATION = "mouse_acceleration"
    DWELL_TIME = "dwell_time"
    FLIGHT_TIME = "flight_time"
    TYPING_SPEED = "typing_speed"
    STRAIGHT_LINE_RATIO = "straight_line_ratio"
    CURVE_COMPLEXITY = "curve_complexity"


def _feature(*aliases: str, description: str):
    return Field(
        default=None,
        validation_alias=AliasChoices(*aliases),
        description=description,
    )


class BehavioralSample(BaseModel):
    """Behavioral biometrics captured by a client for one interaction window.

    Every feature is optional. Client payloads in camelCase
    (``mouseVelocity``, ``dwellTime``) and stored pattern names
    (``avgMouseSpeed``, ``avgKeyHoldTime``) are both accepted.
    """

    sample_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("sample_id", "sampleId", "id"),
        description="Identifier of a stored sample",
    )
    user_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("user_id", "userId"),
    )
    recorded_at: Optional[datetime] = Field(
        default=None,
        validation_alias=AliasChoices("recorded_at", "createdAt"),
    )

    mouse_velocity: Optional[float] = _feature(
        "mouse_velocity", "mouseVelocity", "avgMouseSpeed",
        description="Average mouse speed (px/ms)",
    )
    mouse_acceleration: Optional[float] = _feature(
        "mouse_acceleration", "mouseAcceleration", "avgMouseAcceleration",
        description="Average mouse acceleration",
    )
    dwell_time: Optional[float] = _feature(
        "dwell_time", "dwellTime", "avgKeyHoldTime",
        description="Average key hold time (ms)",
    )
    flight_time: Optional[float] = _feature(
        "flight_time", "flightTime", "avgFlightTime",
        description="Average time between key release and next press (ms)",
    )
    typing_speed: Optional[float] = _feature(
        "typing_speed", "typingSpeed",
        description="Typing speed (characters per minute)",
    )
    straight_line_ratio: Optional[float] = _feature(
        "straight_line_ratio", "straightLineRatio",
        description="Path straightness ratio of mouse movement",
    )
    curve_complexity: Optional[float] = _feature(
        "curve_complexity", "curveComplexity",
        description="Path curve complexity of mouse movement",
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "mouseVelocity": 1.42,
                "mouseAcceleration": 0.031,
                "dwellTime": 96.0,
                "flightTime": 142.0,
                "typingSpeed": 215.0,
            }
        },
    }

    def get(self, feature: BehavioralFeature) -> Optional[float]:
        """Value of a feature, or None when missing."""
        return getattr(self, BehavioralFeature(feature).value)

    def features(self) -> Dict[BehavioralFeature, float]:
        """All non-missing features."""
        values = {}
        for feature in BehavioralFeature:
            value = self.get(feature)
            if value is not None:
                values[feature] = value
        return values

    @property
    def is_empty(self) -> bool:
        return not self.features()
