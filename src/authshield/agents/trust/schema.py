"""Trust Aggregator Output Schema."""

from pydantic import BaseModel, Field

from authshield.core.types import ConfidenceLevel, Recommendation


class TrustComponents(BaseModel):
    """The three trust signals, each in [0, 1]."""
    device: float = Field(..., ge=0.0, le=1.0, description="Device familiarity trust")
    tls: float = Field(..., ge=0.0, le=1.0, description="TLS fingerprint trust")
    behavioral: float = Field(..., ge=0.0, le=1.0, description="Behavioral similarity trust")


class TrustScore(BaseModel):
    """Weighted combination of the trust components."""

    overall_score: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Overall trust from 0 (untrusted) to 1 (fully trusted)"
    )
    confidence_level: ConfidenceLevel
    recommendation: Recommendation
    components: TrustComponents
    weights: dict[str, float] = Field(default_factory=dict)

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "overall_score": 0.78,
                "confidence_level": "high",
                "recommendation": "allow",
                "components": {"device": 0.9, "tls": 0.5, "behavioral": 0.85},
                "weights": {"device": 0.35, "tls": 0.25, "behavioral": 0.40},
            }
        },
    }
