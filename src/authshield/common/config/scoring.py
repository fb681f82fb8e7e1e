"""Scoring policy - every weight, threshold and default used by the risk core.

Components receive a ScoringPolicy (or one of its sections) at construction.
Policies can be loaded from YAML; missing sections fall back to the
canonical defaults below.
"""

import math
from pathlib import Path
from typing import Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from authshield.common.exceptions import ConfigurationError


WEIGHT_SUM_TOLERANCE = 1e-6


def _check_weights(weights: Dict[str, float], section: str) -> None:
    total = sum(weights.values())
    if not math.isclose(total, 1.0, abs_tol=WEIGHT_SUM_TOLERANCE):
        raise ValueError(f"{section} weights must sum to 1.0, got {total:.4f}")


class ZScoreCurve(BaseModel):
    """Piecewise mapping from z-score to anomaly probability.

    z <= low             -> 0
    low < z <= mid       -> (z - low) * low_slope
    mid < z <= high      -> mid_base + (z - mid) * mid_slope
    z > high             -> min(1, high_base + (z - high) * high_slope)
    """
    low: float = 1.0
    mid: float = 2.0
    high: float = 3.0
    low_slope: float = 0.3
    mid_base: float = 0.3
    mid_slope: float = 0.4
    high_base: float = 0.7
    high_slope: float = 0.15

    @model_validator(mode="after")
    def _ordered(self) -> "ZScoreCurve":
        if not (0.0 <= self.low < self.mid < self.high):
            raise ValueError("z-score curve boundaries must satisfy 0 <= low < mid < high")
        return self


class BehaviorScoringConfig(BaseModel):
    """Baseline and anomaly scoring settings."""

    min_baseline_samples: int = Field(default=3, ge=1)
    feature_weights: Dict[str, float] = Field(
        default_factory=lambda: {
            "mouse_velocity": 0.20,
            "mouse_acceleration": 0.15,
            "dwell_time": 0.20,
            "flight_time": 0.15,
            "typing_speed": 0.20,
            "straight_line_ratio": 0.05,
            "curve_complexity": 0.05,
        }
    )
    z_curve: ZScoreCurve = Field(default_factory=ZScoreCurve)

    # A factor is anomalous when its z-score is strictly above this
    factor_z_threshold: float = 2.0
    # Result is an anomaly when normalized score > this, or enough factors are anomalous
    anomaly_score_threshold: float = 0.5
    min_anomalous_factors: int = 3

    # Confidence from number of evaluated factors
    high_confidence_factors: int = 6
    medium_confidence_factors: int = 3

    # Recommendation from behavioral trust
    allow_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    step_up_threshold: float = Field(default=0.5, ge=0.0, le=1.0)

    # Result returned when no baseline exists yet
    no_baseline_score: float = Field(default=0.85, ge=0.0, le=1.0)
    no_baseline_recommendation: str = "step_up"

    # Severity buckets on anomaly probability
    severity_critical: float = 0.90
    severity_high: float = 0.75
    severity_medium: float = 0.55

    # Behavioral alert is critical when trust falls below this
    critical_alert_trust: float = 0.3

    @model_validator(mode="after")
    def _validate(self) -> "BehaviorScoringConfig":
        _check_weights(self.feature_weights, "feature")
        if self.step_up_threshold > self.allow_threshold:
            raise ValueError("step_up_threshold must not exceed allow_threshold")
        return self


class TrustWeights(BaseModel):
    """Weights for the device / tls / behavioral combination."""
    device: float = Field(default=0.35, ge=0.0, le=1.0)
    tls: float = Field(default=0.25, ge=0.0, le=1.0)
    behavioral: float = Field(default=0.40, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _sum_to_one(self) -> "TrustWeights":
        _check_weights(self.model_dump(), "trust")
        return self


class TrustConfig(BaseModel):
    """Trust aggregation settings."""

    weights: TrustWeights = Field(default_factory=TrustWeights)

    allow_threshold: float = Field(default=0.72, ge=0.0, le=1.0)
    step_up_threshold: float = Field(default=0.45, ge=0.0, le=1.0)
    high_confidence_threshold: float = Field(default=0.72, ge=0.0, le=1.0)
    medium_confidence_threshold: float = Field(default=0.55, ge=0.0, le=1.0)

    # Component used when a signal is simply not supplied
    unknown_component: float = Field(default=0.5, ge=0.0, le=1.0)

    # Degraded defaults when a lookup fails
    degraded_device_trust: float = Field(default=0.5, ge=0.0, le=1.0)
    degraded_tls_trust: float = Field(default=0.5, ge=0.0, le=1.0)
    degraded_behavioral_trust: float = Field(default=0.75, ge=0.0, le=1.0)

    # Device familiarity
    unknown_device_trust: float = Field(default=0.3, ge=0.0, le=1.0)
    familiarity_saturation: int = Field(default=10, ge=1)
    familiarity_weight: float = Field(default=0.6, ge=0.0, le=1.0)
    stored_trust_weight: float = Field(default=0.4, ge=0.0, le=1.0)
    default_seen_count: int = Field(default=1, ge=0)
    default_device_trust_score: float = Field(default=0.5, ge=0.0, le=1.0)

    # Fingerprint with no matching record or no stored score
    default_tls_trust: float = Field(default=0.5, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _validate(self) -> "TrustConfig":
        _check_weights(
            {"familiarity": self.familiarity_weight, "stored": self.stored_trust_weight},
            "device familiarity",
        )
        if self.step_up_threshold > self.allow_threshold:
            raise ValueError("step_up_threshold must not exceed allow_threshold")
        if self.medium_confidence_threshold > self.high_confidence_threshold:
            raise ValueError("medium_confidence_threshold must not exceed high_confidence_threshold")
        return self


class GeoConfig(BaseModel):
    """Geo-velocity settings."""
    earth_radius_km: float = Field(default=6371.0, gt=0.0)
    impossible_speed_kmh: float = Field(default=1000.0, gt=0.0)
    critical_speed_kmh: float = Field(default=5000.0, gt=0.0)
    risk_speed_normalizer_kmh: float = Field(default=10000.0, gt=0.0)


class EscalationConfig(BaseModel):
    """Caps applied to a verdict when impossible travel is flagged."""
    block_score_cap: float = Field(default=0.30, ge=0.0, le=1.0)
    step_up_score_cap: float = Field(default=0.49, ge=0.0, le=1.0)


class ScoringPolicy(BaseModel):
    """Complete scoring policy for the risk core."""
    version: str = "1.0.0"
    behavior: BehaviorScoringConfig = Field(default_factory=BehaviorScoringConfig)
    trust: TrustConfig = Field(default_factory=TrustConfig)
    geo: GeoConfig = Field(default_factory=GeoConfig)
    escalation: EscalationConfig = Field(default_factory=EscalationConfig)


def load_scoring_policy(path: Optional[Union[str, Path]] = None) -> ScoringPolicy:
    """Load a scoring policy from YAML.

    Args:
        path: Policy file. When None, the configured policy path is used;
            if the project ships no policy file the built-in defaults apply.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    if path is None:
        from authshield.common.config.settings import get_config
        config = get_config()
        path = config.scoring_policy_path
        if config.scoring_policy_file is None and not path.exists():
            return ScoringPolicy()

    policy_file = Path(path)
    if not policy_file.exists():
        raise ConfigurationError(
            f"Scoring policy file not found: {policy_file}",
            details={"path": str(policy_file)},
        )

    try:
        with open(policy_file, "r") as f:
            raw_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Scoring policy file is not valid YAML: {policy_file}",
            details={"path": str(policy_file), "error": str(e)},
        ) from e

    try:
        return ScoringPolicy.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid scoring policy: {policy_file}",
            details={"path": str(policy_file), "errors": e.errors(include_url=False)},
        ) from e
