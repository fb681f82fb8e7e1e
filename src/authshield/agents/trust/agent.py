"""Trust Aggregator - combines device, TLS and behavioral trust.

Pure combination logic. Lookups (device records, fingerprints) are done by
the caller and passed in; this agent only turns them into trust values.
"""

from typing import Optional

from authshield.agents.trust.schema import TrustComponents, TrustScore
from authshield.common.config.scoring import TrustConfig
from authshield.core.types import ConfidenceLevel, Recommendation, clamp01, tier
from authshield.data.schemas.device import DeviceRecord, FingerprintRecord


class TrustAggregator:
    """Trust Aggregator.

    Responsibilities:
    - Derive device trust from familiarity and stored trust
    - Derive TLS trust from a known fingerprint
    - Weight the components into one score with a three-tier recommendation

    Constraints:
    - No side effects
    - Identical inputs always give identical output
    """

    def __init__(self, config: Optional[TrustConfig] = None):
        self.config = config or TrustConfig()

    def aggregate(
        self,
        device: Optional[float] = None,
        tls: Optional[float] = None,
        behavioral: Optional[float] = None,
    ) -> TrustScore:
        """Combine trust components.

        Args:
            device: Device trust, or None if unknown
            tls: TLS trust, or None if unknown
            behavioral: Behavioral trust, or None if unknown

        Returns:
            TrustScore with overall score, confidence and recommendation
        """
        unknown = self.config.unknown_component
        components = TrustComponents(
            device=clamp01(unknown if device is None else device),
            tls=clamp01(unknown if tls is None else tls),
            behavioral=clamp01(unknown if behavioral is None else behavioral),
        )
        weights = self.config.weights

        overall = clamp01(
            components.device * weights.device
            + components.tls * weights.tls
            + components.behavioral * weights.behavioral
        )

        return TrustScore(
            overall_score=overall,
            confidence_level=tier(
                overall,
                self.config.high_confidence_threshold,
                self.config.medium_confidence_threshold,
                ConfidenceLevel.HIGH,
                ConfidenceLevel.MEDIUM,
                ConfidenceLevel.LOW,
            ),
            recommendation=tier(
                overall,
                self.config.allow_threshold,
                self.config.step_up_threshold,
                Recommendation.ALLOW,
                Recommendation.STEP_UP,
                Recommendation.BLOCK,
            ),
            components=components,
            weights=weights.model_dump(),
        )

    def device_trust(self, device: Optional[DeviceRecord]) -> float:
        """Trust in a device.

        Familiarity saturates at ``familiarity_saturation`` sightings and is
        blended with the stored trust score. Unrecognized devices get a
        fixed low trust.
        """
        if device is None:
            return self.config.unknown_device_trust

        seen_count = device.seen_count if device.seen_count is not None else self.config.default_seen_count
        stored = device.trust_score if device.trust_score is not None else self.config.default_device_trust_score

        familiarity = min(1.0, seen_count / self.config.familiarity_saturation)
        return clamp01(
            familiarity * self.config.familiarity_weight
            + stored * self.config.stored_trust_weight
        )

    def tls_trust(self, fingerprint: Optional[FingerprintRecord]) -> float:
        """Stored trust of a matched fingerprint, default when unmatched."""
        if fingerprint is None or fingerprint.trust_score is None:
            return self.config.default_tls_trust
        return clamp01(fingerprint.trust_score)


def aggregate_trust(
    device: Optional[float] = None,
    tls: Optional[float] = None,
    behavioral: Optional[float] = None,
    config: Optional[TrustConfig] = None,
) -> TrustScore:
    """Pure entry point: weighted trust combination."""
    return TrustAggregator(config).aggregate(device=device, tls=tls, behavioral=behavioral)
