"""Unified risk verdict - the external-facing result of one evaluation."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from authshield.agents.behavior.schema import AnomalyResult
from authshield.agents.geo.schema import ImpossibleTravelVerdict
from authshield.agents.trust.schema import TrustComponents
from authshield.core.types import ConfidenceLevel, Recommendation


class RiskVerdict(BaseModel):
    """Trust aggregation, behavioral scoring and geo-velocity merged.

    ``escalated`` is True when impossible travel forced a stricter decision
    than the trust score alone produced.
    """

    user_id: str
    overall_score: float = Field(..., ge=0.0, le=1.0)
    confidence_level: ConfidenceLevel
    recommendation: Recommendation
    components: TrustComponents
    weights: Dict[str, float] = Field(default_factory=dict)
    factors: Dict[str, Any] = Field(default_factory=dict)
    behavioral: Optional[AnomalyResult] = None
    impossible_travel: Optional[ImpossibleTravelVerdict] = None
    escalated: bool = False
    degraded: list[str] = Field(
        default_factory=list,
        description="Signals that fell back to defaults after a lookup failure"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "user_id": "user_abc123",
                "overall_score": 0.3,
                "confidence_level": "low",
                "recommendation": "block",
                "components": {"device": 0.9, "tls": 0.5, "behavioral": 0.85},
                "weights": {"device": 0.35, "tls": 0.25, "behavioral": 0.40},
                "factors": {
                    "impossible_travel": True,
                    "travel_distance_km": 5570.2,
                    "time_delta_minutes": 45.0,
                    "required_speed_kmh": 7426.9,
                },
                "escalated": True,
            }
        }
    }
