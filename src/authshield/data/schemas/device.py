"""Device and TLS fingerprint records as returned by the trust lookups."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class DeviceRecord(BaseModel):
    """A device previously observed for a user.

    device_id is a hash (not a raw fingerprint).
    """
    device_id: str = Field(..., description="Hashed device fingerprint")
    user_id: Optional[str] = Field(default=None)
    seen_count: Optional[int] = Field(default=None, ge=0, description="Times this device was seen")
    trust_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    first_seen: Optional[datetime] = Field(default=None)
    last_seen: Optional[datetime] = Field(default=None)

    model_config = {
        "json_schema_extra": {
            "example": {
                "device_id": "dev_hash_xyz789",
                "user_id": "user_abc123",
                "seen_count": 7,
                "trust_score": 0.8,
                "last_seen": "2026-01-25T14:30:00Z",
            }
        }
    }


class FingerprintRecord(BaseModel):
    """A known TLS client fingerprint (JA3 / JA4) with its stored trust."""
    fingerprint_id: str = Field(..., description="Record identifier")
    ja3_hash: Optional[str] = Field(default=None)
    ja4_hash: Optional[str] = Field(default=None)
    trust_score: Optional[float] = Field(default=None)
    last_seen: Optional[datetime] = Field(default=None)

    def matches(self, fingerprint_hash: str) -> bool:
        """Whether a JA3 or JA4 hash identifies this fingerprint."""
        return fingerprint_hash in (self.ja3_hash, self.ja4_hash)
