"""Risk events - unified verdict, escalation rule and notifications."""

from authshield.governance.events.emitter import RiskEventEmitter, apply_impossible_travel
from authshield.governance.events.hub import ActivityHub, ActivityListener
from authshield.governance.events.schema import RiskVerdict

__all__ = [
    "ActivityHub",
    "ActivityListener",
    "RiskEventEmitter",
    "RiskVerdict",
    "apply_impossible_travel",
]
