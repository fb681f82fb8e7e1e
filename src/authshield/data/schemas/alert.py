"""Outward notification schemas - persisted alerts and live activity events."""

from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from authshield.core.types import AlertType, ConfidenceLevel, Severity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnomalyAlert(BaseModel):
    """Structured alert handed to the alert sink for storage."""
    alert_id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    alert_type: AlertType
    severity: Severity
    description: str
    risk_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)


class ActivityEvent(BaseModel):
    """Small event for the live activity feed."""
    id: str = Field(default_factory=lambda: str(uuid4()))
    type: Literal["risk_calculated"] = "risk_calculated"
    user_id: Optional[str] = None
    risk_score: float = Field(..., ge=0.0, le=1.0)
    confidence_level: ConfidenceLevel
    message: str
    timestamp: datetime = Field(default_factory=_utcnow)

    def envelope(self) -> Dict[str, Any]:
        """Wire envelope sent to listeners."""
        return {"type": "activity", "activity": self.model_dump(mode="json")}
