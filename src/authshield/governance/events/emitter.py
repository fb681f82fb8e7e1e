"""Risk Event Emitter - escalation rule and outward notifications.

apply_impossible_travel() is the hard escalation rule: impossible travel can
only make a verdict stricter, never looser.

RiskEventEmitter turns results into alert records and activity events and
hands them to the alert sink and the activity hub. These side effects are
fire-and-forget: failures are logged here and never reach the verdict.
"""

import logging
from typing import Optional

from authshield.agents.behavior.schema import AnomalyResult
from authshield.agents.geo.schema import ImpossibleTravelVerdict
from authshield.common.config.scoring import EscalationConfig, GeoConfig
from authshield.common.constants import AlertConstants
from authshield.core.types import AlertType, ConfidenceLevel, Recommendation, Severity, clamp01
from authshield.data.schemas.alert import ActivityEvent, AnomalyAlert
from authshield.data.stores.base import AlertSink
from authshield.governance.events.hub import ActivityHub
from authshield.governance.events.schema import RiskVerdict


logger = logging.getLogger(__name__)


def apply_impossible_travel(
    verdict: RiskVerdict,
    travel: Optional[ImpossibleTravelVerdict],
    geo_config: Optional[GeoConfig] = None,
    escalation: Optional[EscalationConfig] = None,
) -> RiskVerdict:
    """Merge a geo-velocity outcome into a verdict.

    Factor maps are always merged. When impossible travel is flagged the
    confidence drops to low and the score is capped: above the critical
    speed the recommendation becomes block, otherwise step_up.
    """
    if travel is None:
        return verdict

    geo_config = geo_config or GeoConfig()
    escalation = escalation or EscalationConfig()

    factors = {**verdict.factors, **travel.factors}
    update = {"factors": factors, "impossible_travel": travel}

    if travel.impossible_travel:
        speed = travel.required_speed_kmh or 0.0
        if speed > geo_config.critical_speed_kmh:
            recommendation = Recommendation.BLOCK
            cap = escalation.block_score_cap
        else:
            recommendation = Recommendation.STEP_UP
            cap = escalation.step_up_score_cap
        # A block already in place stays a block
        if verdict.recommendation == Recommendation.BLOCK:
            recommendation = Recommendation.BLOCK
        update.update(
            overall_score=min(verdict.overall_score, cap),
            confidence_level=ConfidenceLevel.LOW,
            recommendation=recommendation,
            escalated=True,
        )

    return verdict.model_copy(update=update)


def _place(city: Optional[str], country: Optional[str]) -> str:
    def clean(value: Optional[str]) -> str:
        return value if value and value.strip() else AlertConstants.UNKNOWN_PLACE
    return f"{clean(city)}, {clean(country)}"


class RiskEventEmitter:
    """Builds alerts and activity events and delivers them best-effort."""

    def __init__(
        self,
        alert_sink: Optional[AlertSink] = None,
        hub: Optional[ActivityHub] = None,
        critical_alert_trust: float = 0.3,
    ):
        """Initialize the emitter.

        Args:
            alert_sink: Where alerts are stored. None disables alert storage.
            hub: Live activity hub. None disables broadcasting.
            critical_alert_trust: Behavioral alerts below this trust are critical
        """
        self.alert_sink = alert_sink
        self.hub = hub
        self.critical_alert_trust = critical_alert_trust

    # ----- record builders -----

    def behavioral_alert(self, user_id: str, result: AnomalyResult) -> AnomalyAlert:
        names = ", ".join(f.name for f in result.anomalous_factors) or AlertConstants.UNKNOWN_FACTOR
        severity = Severity.CRITICAL if result.overall_score < self.critical_alert_trust else Severity.HIGH
        return AnomalyAlert(
            user_id=user_id,
            alert_type=AlertType.BEHAVIORAL,
            severity=severity,
            description=f"Behavioral anomaly detected: {names}",
            risk_score=clamp01(1.0 - result.overall_score),
            metadata={
                "anomaly_probability": result.anomaly_probability,
                "z_score": result.z_score,
                "confidence_level": result.confidence_level.value,
                "factors": [f.model_dump() for f in result.anomalous_factors],
            },
        )

    def travel_alert(self, verdict: ImpossibleTravelVerdict) -> AnomalyAlert:
        current = verdict.current_point
        previous = verdict.previous_point
        speed = verdict.required_speed_kmh
        metadata = {
            "source_ip": current.ip_address,
            "source_location": {
                "city": current.city,
                "country": current.country,
                "lat": current.latitude,
                "lng": current.longitude,
            },
            "previous_ip": previous.ip_address if previous else None,
            "previous_location": {
                "city": previous.city,
                "country": previous.country,
                "lat": previous.latitude,
                "lng": previous.longitude,
            } if previous else None,
            "travel_distance_km": verdict.distance_km,
            "time_delta_minutes": verdict.time_delta_minutes,
            "required_speed_kmh": speed,
            "risk_score": verdict.risk_score,
        }
        from_place = _place(previous.city, previous.country) if previous else AlertConstants.UNKNOWN_PLACE
        return AnomalyAlert(
            user_id=verdict.user_id,
            alert_type=AlertType.IMPOSSIBLE_TRAVEL,
            severity=verdict.severity or Severity.HIGH,
            description=(
                f"User appeared in {_place(current.city, current.country)} from {from_place}"
                f" requiring {_round(speed)} km/h travel speed"
            ),
            risk_score=verdict.risk_score,
            metadata=metadata,
        )

    # ----- emission -----

    def emit_behavioral_anomaly(self, user_id: str, result: AnomalyResult) -> Optional[AnomalyAlert]:
        """Store an alert and broadcast activity for an anomalous result."""
        if not result.is_anomaly:
            return None
        logger.warning(f"Behavioral anomaly detected for user {user_id}")
        alert = self._store(self.behavioral_alert(user_id, result))
        self._broadcast(
            user_id=user_id,
            risk_score=clamp01(1.0 - result.overall_score),
            confidence_level=result.confidence_level,
            message=f"Behavioral anomaly detected for user {user_id}",
        )
        return alert

    def emit_impossible_travel(self, verdict: ImpossibleTravelVerdict) -> Optional[AnomalyAlert]:
        """Store an alert and broadcast activity for flagged travel."""
        if not verdict.impossible_travel:
            return None
        alert = self._store(self.travel_alert(verdict))
        self._broadcast(
            user_id=verdict.user_id,
            risk_score=verdict.risk_score,
            confidence_level=ConfidenceLevel.LOW,
            message=(
                f"Impossible travel detected: {_round(verdict.distance_km)}km in "
                f"{_round(verdict.time_delta_minutes)} minutes"
            ),
        )
        return alert

    def emit_risk_calculated(self, verdict: RiskVerdict) -> None:
        self._broadcast(
            user_id=verdict.user_id,
            risk_score=verdict.overall_score,
            confidence_level=verdict.confidence_level,
            message=f"Risk score calculated for user {verdict.user_id}",
        )

    def _store(self, alert: AnomalyAlert) -> Optional[AnomalyAlert]:
        if self.alert_sink is None:
            return alert
        try:
            return self.alert_sink.save(alert)
        except Exception as e:
            logger.error(f"Failed to store {alert.alert_type.value} alert for {alert.user_id}: {e}")
            return None

    def _broadcast(
        self,
        user_id: str,
        risk_score: float,
        confidence_level: ConfidenceLevel,
        message: str,
    ) -> None:
        if self.hub is None:
            return
        try:
            event = ActivityEvent(
                user_id=user_id,
                risk_score=clamp01(risk_score),
                confidence_level=confidence_level,
                message=message,
            )
            self.hub.publish(event)
        except Exception as e:
            logger.warning(f"Activity broadcast failed: {e}")


def _round(value: Optional[float]) -> str:
    if value is None:
        return "?"
    if value == float("inf"):
        return "inf"
    return str(round(value))
