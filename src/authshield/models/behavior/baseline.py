"""Behavioral baseline construction.

A baseline is a per-feature (mean, sample std-dev) profile built from a
user's historical samples. It is recomputed on demand from the source
samples and never cached.

Fewer than ``min_baseline_samples`` samples produce no baseline at all.
Callers treat that as "insufficient data", which is different from a
zeroed baseline.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np
from pydantic import BaseModel, Field

from authshield.common.config.scoring import BehaviorScoringConfig
from authshield.data.schemas.behavioral_sample import BehavioralFeature, BehavioralSample


INSUFFICIENT_BASELINE_MESSAGE = (
    "Insufficient data for baseline (need at least {n} behavioral patterns)"
)


@dataclass(frozen=True)
class BaselineMetric:
    """Mean and sample standard deviation of one feature."""
    mean: float
    std_dev: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> "BaselineMetric":
        """Build a metric from raw values.

        Empty input gives (0, 0); a single value gives std_dev 0.
        """
        if len(values) == 0:
            return cls(mean=0.0, std_dev=0.0)
        arr = np.asarray(values, dtype=np.float64)
        mean = float(arr.mean())
        if arr.size < 2:
            return cls(mean=mean, std_dev=0.0)
        return cls(mean=mean, std_dev=float(arr.std(ddof=1)))

    def to_dict(self) -> Dict[str, float]:
        return {"mean": self.mean, "std_dev": self.std_dev}


@dataclass(frozen=True)
class BaselineProfile:
    """Per-feature baseline for one user.

    Attributes:
        metrics: One metric for each of the tracked features
        sample_count: Number of historical samples it was built from
    """
    metrics: Dict[BehavioralFeature, BaselineMetric]
    sample_count: int
    user_id: Optional[str] = field(default=None)

    def get(self, feature: BehavioralFeature) -> Optional[BaselineMetric]:
        return self.metrics.get(BehavioralFeature(feature))

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {feature.value: metric.to_dict() for feature, metric in self.metrics.items()}


class BaselineResponse(BaseModel):
    """Baseline lookup result, distinguishing "no baseline yet" explicitly."""
    has_baseline: bool
    message: Optional[str] = None
    sample_count: int = 0
    baseline: Optional[Dict[str, Dict[str, float]]] = Field(default=None)

    @classmethod
    def insufficient(cls, sample_count: int, min_samples: int = 3) -> "BaselineResponse":
        return cls(
            has_baseline=False,
            message=INSUFFICIENT_BASELINE_MESSAGE.format(n=min_samples),
            sample_count=sample_count,
        )

    @classmethod
    def ok(cls, profile: BaselineProfile) -> "BaselineResponse":
        return cls(
            has_baseline=True,
            sample_count=profile.sample_count,
            baseline=profile.to_dict(),
        )


class BaselineBuilder:
    """Builds BaselineProfiles from historical samples. Stateless."""

    def __init__(self, config: Optional[BehaviorScoringConfig] = None):
        self.config = config or BehaviorScoringConfig()

    def build(
        self,
        samples: Sequence[BehavioralSample],
        user_id: Optional[str] = None,
    ) -> Optional[BaselineProfile]:
        """Compute the baseline, or None when there are too few samples.

        Args:
            samples: Historical samples, newest first
            user_id: Owner, carried onto the profile

        Returns:
            BaselineProfile covering every tracked feature, or None
        """
        if len(samples) < self.config.min_baseline_samples:
            return None

        metrics: Dict[BehavioralFeature, BaselineMetric] = {}
        for feature in BehavioralFeature:
            values: List[float] = [
                value for value in (s.get(feature) for s in samples) if value is not None
            ]
            metrics[feature] = BaselineMetric.from_values(values)

        return BaselineProfile(metrics=metrics, sample_count=len(samples), user_id=user_id)

    def describe(self, samples: Sequence[BehavioralSample], user_id: Optional[str] = None) -> BaselineResponse:
        """Build a BaselineResponse for the samples."""
        profile = self.build(samples, user_id=user_id)
        if profile is None:
            return BaselineResponse.insufficient(len(samples), self.config.min_baseline_samples)
        return BaselineResponse.ok(profile)


def build_baseline(
    samples: Sequence[BehavioralSample],
    config: Optional[BehaviorScoringConfig] = None,
) -> Optional[BaselineProfile]:
    """Pure entry point: baseline for the samples, or None if insufficient."""
    return BaselineBuilder(config).build(samples)
