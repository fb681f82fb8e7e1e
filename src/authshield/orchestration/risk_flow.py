"""Risk Evaluation Flow - the one place a unified verdict is produced.

Lifecycle of evaluate():
1. Validate input (user_id is required)
2. Resolve trust components, consulting stores where not supplied
   (a device that is looked up is recorded as seen)
3. Build the baseline and score behavior
4. Aggregate trust
5. Check geo-velocity when the request carries a location
6. Escalate on impossible travel
7. Emit alerts and activity (best-effort)

Error Handling:
- Missing user_id raises InvalidInputError
- Lookup failures degrade to documented defaults, never to a server error
- Alert and broadcast failures never alter the verdict
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Tuple

from authshield.agents.behavior.agent import AnomalyScorer
from authshield.agents.behavior.schema import AnomalyResult
from authshield.agents.geo.agent import GeoVelocityDetector
from authshield.agents.geo.schema import ImpossibleTravelVerdict
from authshield.agents.trust.agent import TrustAggregator
from authshield.common.config.scoring import ScoringPolicy
from authshield.common.exceptions import UpstreamLookupError, require_user_id
from authshield.data.schemas.behavioral_sample import BehavioralSample
from authshield.data.schemas.device import DeviceRecord
from authshield.data.schemas.requests import ImpossibleTravelRequest, RiskRequest
from authshield.data.stores.base import (
    AlertSink,
    DeviceStore,
    FingerprintStore,
    GeoHistoryStore,
    SampleHistoryStore,
)
from authshield.governance.events.emitter import RiskEventEmitter, apply_impossible_travel
from authshield.governance.events.hub import ActivityHub
from authshield.governance.events.schema import RiskVerdict
from authshield.models.behavior.baseline import BaselineBuilder, BaselineProfile, BaselineResponse


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RiskEvaluationFlow:
    """Orchestrates scoring components against the collaborator stores.

    Holds no per-request state; concurrent evaluations for different users
    share nothing but the stores.
    """

    def __init__(
        self,
        samples: SampleHistoryStore,
        devices: Optional[DeviceStore] = None,
        fingerprints: Optional[FingerprintStore] = None,
        geo_history: Optional[GeoHistoryStore] = None,
        alert_sink: Optional[AlertSink] = None,
        hub: Optional[ActivityHub] = None,
        policy: Optional[ScoringPolicy] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize the flow.

        Args:
            samples: Behavioral sample history
            devices: Device lookup. Without it device trust is unknown unless supplied.
            fingerprints: TLS fingerprint lookup
            geo_history: Location history. Without it no geo check runs.
            alert_sink: Alert storage
            hub: Live activity hub
            policy: Scoring policy. Defaults to the canonical policy.
            clock: Source of "now"
        """
        self.policy = policy or ScoringPolicy()
        self.samples = samples
        self.devices = devices
        self.fingerprints = fingerprints
        self.geo_history = geo_history

        self.baseline_builder = BaselineBuilder(self.policy.behavior)
        self.scorer = AnomalyScorer(self.policy.behavior)
        self.aggregator = TrustAggregator(self.policy.trust)
        self.detector = GeoVelocityDetector(self.policy.geo, clock=clock)
        self.emitter = RiskEventEmitter(
            alert_sink=alert_sink,
            hub=hub,
            critical_alert_trust=self.policy.behavior.critical_alert_trust,
        )

    # ----- entry points -----

    def evaluate(self, request: RiskRequest) -> RiskVerdict:
        """Produce a unified verdict for one request.

        Raises:
            InvalidInputError: If user_id is missing
        """
        user_id = require_user_id(request.user_id)
        degraded: list[str] = []

        device_trust = self._resolve_device_trust(user_id, request, degraded)
        tls_trust = self._resolve_tls_trust(request, degraded)
        behavioral = self._score_request_behavior(user_id, request, degraded)
        behavioral_trust = self._behavioral_trust(behavioral)

        trust = self.aggregator.aggregate(
            device=device_trust,
            tls=tls_trust,
            behavioral=behavioral_trust,
        )

        factors = {}
        if behavioral is not None:
            self.emitter.emit_behavioral_anomaly(user_id, behavioral)
            factors.update(
                anomaly_probability=behavioral.anomaly_probability,
                is_anomaly=behavioral.is_anomaly,
                z_score=behavioral.z_score,
                severity=behavioral.severity.value,
            )

        verdict = RiskVerdict(
            user_id=user_id,
            overall_score=trust.overall_score,
            confidence_level=trust.confidence_level,
            recommendation=trust.recommendation,
            components=trust.components,
            weights=trust.weights,
            factors=factors,
            behavioral=behavioral,
        )

        if request.has_geo_context:
            travel = self._check_travel(request.travel_request(), degraded)
            if travel is not None:
                verdict = apply_impossible_travel(
                    verdict, travel, self.policy.geo, self.policy.escalation
                )
                alert = self.emitter.emit_impossible_travel(travel)
                if alert is not None:
                    verdict = verdict.model_copy(
                        update={"factors": {**verdict.factors, "alert_id": alert.alert_id}}
                    )

        if degraded:
            verdict = verdict.model_copy(update={"degraded": list(degraded)})
            logger.warning(
                f"Risk for user {user_id} computed with degraded signals: {', '.join(degraded)}"
            )
        self.emitter.emit_risk_calculated(verdict)
        return verdict

    def get_baseline(self, user_id: Optional[str]) -> BaselineResponse:
        """Baseline for a user, or an explicit insufficient-data response.

        Raises:
            InvalidInputError: If user_id is missing
            UpstreamLookupError: If the sample history cannot be read
        """
        user_id = require_user_id(user_id)
        history = self.samples.list_samples(user_id)
        return self.baseline_builder.describe(history, user_id=user_id)

    def check_anomaly(self, user_id: Optional[str], sample: Optional[BehavioralSample]) -> AnomalyResult:
        """Score a sample for a user and alert when it is anomalous.

        Raises:
            InvalidInputError: If user_id is missing
            UpstreamLookupError: If the sample history cannot be read
        """
        user_id = require_user_id(user_id)
        baseline = self._baseline_for(user_id)
        result = self.scorer.score(sample or BehavioralSample(), baseline)
        self.emitter.emit_behavioral_anomaly(user_id, result)
        return result

    def detect_impossible_travel(self, request: ImpossibleTravelRequest) -> ImpossibleTravelVerdict:
        """Check and record a new location, alerting on impossible travel.

        Raises:
            InvalidInputError: If user_id is missing
            ValueError: If no geo history store is configured
            UpstreamLookupError: If the geo history store fails
        """
        require_user_id(request.user_id)
        if self.geo_history is None:
            raise ValueError("geo_history store is required for impossible-travel detection")
        verdict = self.detector.detect_and_record(request, self.geo_history)
        self.emitter.emit_impossible_travel(verdict)
        return verdict

    # ----- signal resolution -----

    def _baseline_for(self, user_id: str) -> Optional[BaselineProfile]:
        return self.baseline_builder.build(self.samples.list_samples(user_id), user_id=user_id)

    def _resolve_device_trust(
        self,
        user_id: str,
        request: RiskRequest,
        degraded: list[str],
    ) -> Optional[float]:
        if request.device_trust is not None:
            return request.device_trust
        if not request.device_id or self.devices is None:
            return None
        try:
            record = self.devices.get_device(request.device_id)
        except UpstreamLookupError as e:
            logger.warning(f"Device lookup failed, using default trust: {e.message}")
            degraded.append("device")
            return self.policy.trust.degraded_device_trust

        if record is not None and record.user_id and record.user_id != user_id:
            # Only the requesting user's own devices count as known
            logger.warning(f"Device {request.device_id} belongs to another user, treating as unknown")
            return self.aggregator.device_trust(None)

        trust = self.aggregator.device_trust(record)
        self._record_sighting(user_id, request.device_id)
        return trust

    def _record_sighting(self, user_id: str, device_id: str) -> None:
        """Best-effort; a failed write never changes the verdict."""
        try:
            self.devices.record_sighting(DeviceRecord(device_id=device_id, user_id=user_id))
        except UpstreamLookupError as e:
            logger.warning(f"Could not record sighting of device {device_id}: {e.message}")

    def _behavioral_trust(self, behavioral: Optional[AnomalyResult]) -> Optional[float]:
        """Behavioral component for aggregation.

        A failed lookup uses the degraded default. A baseline with nothing
        to compare against is unknown, not a perfect match.
        """
        if behavioral is None:
            return self.policy.trust.degraded_behavioral_trust
        if behavioral.has_baseline and not behavioral.factors:
            return None
        return behavioral.overall_score

    def _resolve_tls_trust(self, request: RiskRequest, degraded: list[str]) -> Optional[float]:
        if request.tls_trust is not None:
            return request.tls_trust
        if not request.tls_fingerprint or self.fingerprints is None:
            return None
        try:
            # Accept either a record id or a JA3/JA4 hash
            record = self.fingerprints.get_by_id(request.tls_fingerprint)
            if record is None:
                record = self.fingerprints.find_by_hash(request.tls_fingerprint)
        except UpstreamLookupError as e:
            logger.warning(f"Fingerprint lookup failed, using default trust: {e.message}")
            degraded.append("tls")
            return self.policy.trust.degraded_tls_trust
        return self.aggregator.tls_trust(record)

    def _score_request_behavior(
        self,
        user_id: str,
        request: RiskRequest,
        degraded: list[str],
    ) -> Optional[AnomalyResult]:
        try:
            sample, baseline = self._load_behavior(user_id, request)
        except UpstreamLookupError as e:
            logger.warning(f"Sample history lookup failed, using default behavioral trust: {e.message}")
            degraded.append("behavioral")
            return None
        return self.scorer.score(sample, baseline)

    def _load_behavior(
        self,
        user_id: str,
        request: RiskRequest,
    ) -> Tuple[BehavioralSample, Optional[BaselineProfile]]:
        sample = request.current_behavior
        if (sample is None or sample.is_empty) and request.behavioral_sample_id:
            stored = self.samples.get_sample(request.behavioral_sample_id)
            if stored is not None:
                sample = stored
        return sample or BehavioralSample(), self._baseline_for(user_id)

    def _check_travel(
        self,
        request: ImpossibleTravelRequest,
        degraded: list[str],
    ) -> Optional[ImpossibleTravelVerdict]:
        if self.geo_history is None:
            return None
        try:
            return self.detector.detect_and_record(request, self.geo_history)
        except UpstreamLookupError as e:
            logger.warning(f"Geo history unavailable, skipping impossible-travel check: {e.message}")
            degraded.append("geo")
            return None
