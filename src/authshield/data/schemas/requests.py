"""Request schemas for the evaluation flow.

Any identifier may be omitted; the flow falls back to defaults for
missing signals. user_id is checked by the flow, not here, so a missing
id surfaces as InvalidInputError rather than a schema error.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, Field

from authshield.data.schemas.behavioral_sample import BehavioralSample


class ImpossibleTravelRequest(BaseModel):
    """New location observation to check against the user's history."""
    user_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("user_id", "userId"))
    session_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("session_id", "sessionId"))
    ip_address: Optional[str] = Field(default=None, validation_alias=AliasChoices("ip_address", "ipAddress"))
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    city: Optional[str] = None
    country: Optional[str] = None

    model_config = {"populate_by_name": True}


class RiskRequest(BaseModel):
    """Signals submitted for one risk evaluation.

    Trust components may be supplied directly; otherwise they are looked up
    from the device and fingerprint stores.
    """
    user_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("user_id", "userId"))
    session_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("session_id", "sessionId"))

    device_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("device_id", "deviceProfileId")
    )
    tls_fingerprint: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("tls_fingerprint", "tlsFingerprintId"),
        description="Fingerprint record id or JA3/JA4 hash",
    )
    behavioral_sample_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("behavioral_sample_id", "behavioralPatternId"),
        description="Stored sample to score when current_behavior is empty",
    )
    current_behavior: Optional[BehavioralSample] = Field(
        default=None, validation_alias=AliasChoices("current_behavior", "currentBehavior")
    )

    device_trust: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    tls_trust: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    ip_address: Optional[str] = Field(default=None, validation_alias=AliasChoices("ip_address", "ipAddress"))
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    city: Optional[str] = None
    country: Optional[str] = None

    model_config = {"populate_by_name": True}

    @property
    def has_geo_context(self) -> bool:
        return (
            self.latitude is not None
            and self.longitude is not None
            and bool(self.ip_address and self.ip_address.strip())
        )

    def travel_request(self) -> ImpossibleTravelRequest:
        return ImpossibleTravelRequest(
            user_id=self.user_id,
            session_id=self.session_id,
            ip_address=self.ip_address,
            latitude=self.latitude,
            longitude=self.longitude,
            city=self.city,
            country=self.country,
        )
