"""Anomaly Scorer - compares a live behavioral sample with the user's baseline.

Identity continuity check: measures deviation from baseline.
Low score means different, not necessarily fraudulent.

Each tracked feature is scored by its z-score against the baseline, mapped
onto an anomaly probability and combined with fixed feature weights. Only
features actually evaluated contribute weight, so a sample carrying two
features is judged on those two alone.

This agent thinks. It does not act: alerting on an anomaly is up to the caller.
"""

import logging
from typing import Optional

from authshield.agents.behavior.schema import AnomalyFactor, AnomalyResult
from authshield.common.config.scoring import BehaviorScoringConfig
from authshield.core.types import ConfidenceLevel, Recommendation, Severity, clamp01, tier
from authshield.data.schemas.behavioral_sample import BehavioralFeature, BehavioralSample
from authshield.models.behavior.baseline import BaselineProfile
from authshield.models.behavior.zscore import anomaly_probability, z_score


logger = logging.getLogger(__name__)


class AnomalyScorer:
    """Behavioral Anomaly Scorer.

    Responsibilities:
    - Compare current sample vs historical baseline
    - Weight per-feature anomaly probabilities
    - Recommend allow / step_up / block from behavioral trust

    Constraints:
    - No side effects
    - No persistence or alerting
    - No retained state between calls
    """

    def __init__(self, config: Optional[BehaviorScoringConfig] = None):
        """Initialize the scorer.

        Args:
            config: Weights and thresholds. Defaults to the canonical policy.
        """
        self.config = config or BehaviorScoringConfig()

    def score(
        self,
        sample: BehavioralSample,
        baseline: Optional[BaselineProfile],
    ) -> AnomalyResult:
        """Score a sample against a baseline.

        Args:
            sample: Current behavioral observation
            baseline: The user's baseline, or None when there is not enough history

        Returns:
            AnomalyResult with trust score, factors and recommendation
        """
        if baseline is None:
            return self._no_baseline_result()

        factors: list[AnomalyFactor] = []
        weighted_probability = 0.0
        total_weight = 0.0

        for feature in BehavioralFeature:
            weight = self.config.feature_weights.get(feature.value, 0.0)
            value = sample.get(feature)
            metric = baseline.get(feature)

            # Mean of exactly 0 means the feature was never observed
            if value is None or metric is None or metric.mean == 0:
                continue

            z = z_score(value, metric.mean, metric.std_dev)
            probability = anomaly_probability(z, self.config.z_curve)

            factors.append(
                AnomalyFactor(
                    name=feature.value,
                    observed_value=value,
                    expected_value=metric.mean,
                    z_score=z,
                    is_anomalous=z > self.config.factor_z_threshold,
                )
            )
            weighted_probability += probability * weight
            total_weight += weight

        normalized = weighted_probability / total_weight if total_weight > 0 else 0.0
        trust = clamp01(1.0 - normalized)

        anomalous_count = sum(1 for f in factors if f.is_anomalous)
        is_anomaly = (
            normalized > self.config.anomaly_score_threshold
            or anomalous_count >= self.config.min_anomalous_factors
        )

        result = AnomalyResult(
            overall_score=trust,
            is_anomaly=is_anomaly,
            confidence_level=self._confidence(len(factors)),
            recommendation=self._recommendation(trust),
            factors=factors,
            anomaly_probability=clamp01(normalized),
            z_score=max((f.z_score for f in factors), default=0.0),
            severity=self._severity(clamp01(normalized)),
            has_baseline=True,
        )

        logger.debug(
            "Behavior scored",
            extra={
                "trust": result.overall_score,
                "evaluated_factors": len(factors),
                "anomalous_factors": anomalous_count,
            },
        )
        return result

    def _no_baseline_result(self) -> AnomalyResult:
        """Low-confidence result used until a baseline exists.

        Errs toward step-up rather than allow.
        """
        return AnomalyResult(
            overall_score=self.config.no_baseline_score,
            is_anomaly=False,
            confidence_level=ConfidenceLevel.LOW,
            recommendation=Recommendation(self.config.no_baseline_recommendation),
            has_baseline=False,
        )

    def _confidence(self, evaluated: int) -> ConfidenceLevel:
        return tier(
            evaluated,
            self.config.high_confidence_factors,
            self.config.medium_confidence_factors,
            ConfidenceLevel.HIGH,
            ConfidenceLevel.MEDIUM,
            ConfidenceLevel.LOW,
        )

    def _recommendation(self, trust: float) -> Recommendation:
        return tier(
            trust,
            self.config.allow_threshold,
            self.config.step_up_threshold,
            Recommendation.ALLOW,
            Recommendation.STEP_UP,
            Recommendation.BLOCK,
        )

    def _severity(self, probability: float) -> Severity:
        if probability >= self.config.severity_critical:
            return Severity.CRITICAL
        if probability >= self.config.severity_high:
            return Severity.HIGH
        if probability >= self.config.severity_medium:
            return Severity.MEDIUM
        return Severity.LOW


def score_behavior(
    sample: BehavioralSample,
    baseline: Optional[BaselineProfile],
    config: Optional[BehaviorScoringConfig] = None,
) -> AnomalyResult:
    """Pure entry point: score a sample against a baseline."""
    return AnomalyScorer(config).score(sample, baseline)
