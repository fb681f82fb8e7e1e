"""Anomaly Scorer Output Schema.

Pydantic models for structured behavioral scoring output.
No ML dependencies. Pure data validation.
"""

from pydantic import BaseModel, Field

from authshield.core.types import ConfidenceLevel, Recommendation, Severity


class AnomalyFactor(BaseModel):
    """Comparison of one feature against its baseline."""
    name: str = Field(..., description="Behavioral feature name")
    observed_value: float = Field(..., description="Value in the current sample")
    expected_value: float = Field(..., description="Baseline mean")
    z_score: float = Field(..., ge=0.0, description="Absolute deviation in standard deviations")
    is_anomalous: bool = Field(..., description="Whether z_score exceeds the factor threshold")


class AnomalyResult(BaseModel):
    """Output from the Anomaly Scorer.

    overall_score is a trust score: higher means the session looks more like
    the same human.
    """

    overall_score: float = Field(
        ...,
        ge=0.0,
        le=1.0,
        description="Behavioral trust from 0 (very different) to 1 (matches baseline)"
    )
    is_anomaly: bool = Field(default=False)
    confidence_level: ConfidenceLevel
    recommendation: Recommendation
    factors: list[AnomalyFactor] = Field(default_factory=list)
    anomaly_probability: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Weighted anomaly probability across evaluated features"
    )
    z_score: float = Field(default=0.0, ge=0.0, description="Largest factor z-score")
    severity: Severity = Field(default=Severity.LOW)
    has_baseline: bool = Field(default=True)

    model_config = {
        "json_schema_extra": {
            "example": {
                "overall_score": 0.42,
                "is_anomaly": True,
                "confidence_level": "medium",
                "recommendation": "block",
                "factors": [
                    {
                        "name": "typing_speed",
                        "observed_value": 410.0,
                        "expected_value": 220.0,
                        "z_score": 4.1,
                        "is_anomalous": True,
                    }
                ],
                "anomaly_probability": 0.58,
                "z_score": 4.1,
                "severity": "medium",
                "has_baseline": True,
            }
        }
    }

    @property
    def anomalous_factors(self) -> list[AnomalyFactor]:
        return [f for f in self.factors if f.is_anomalous]
