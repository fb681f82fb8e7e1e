"""Behavioral statistics.

Per-user baselines and the z-score curve used by the anomaly scorer.
No training beyond mean and sample variance.
"""

from authshield.models.behavior.baseline import (
    BaselineBuilder,
    BaselineMetric,
    BaselineProfile,
    BaselineResponse,
    build_baseline,
)
from authshield.models.behavior.zscore import anomaly_probability, z_score

__all__ = [
    "BaselineBuilder",
    "BaselineMetric",
    "BaselineProfile",
    "BaselineResponse",
    "build_baseline",
    "anomaly_probability",
    "z_score",
]
