"""Store interfaces - the narrow seams between the risk core and persistence.

The core never owns storage. Implementations wrap whatever record store the
deployment uses and must raise UpstreamLookupError when a lookup fails or
times out, so the evaluation flow can degrade to its documented defaults.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from authshield.data.schemas.alert import AnomalyAlert
from authshield.data.schemas.behavioral_sample import BehavioralSample
from authshield.data.schemas.device import DeviceRecord, FingerprintRecord
from authshield.data.schemas.geo_point import GeoPoint


class SampleHistoryStore(ABC):
    """Historical behavioral samples per user."""

    @abstractmethod
    def list_samples(self, user_id: str) -> List[BehavioralSample]:
        """Return the user's samples ordered newest first."""
        pass

    @abstractmethod
    def get_sample(self, sample_id: str) -> Optional[BehavioralSample]:
        """Return one stored sample, or None if not found."""
        pass


class DeviceStore(ABC):
    """Known devices."""

    @abstractmethod
    def get_device(self, device_id: str) -> Optional[DeviceRecord]:
        """Return the device record, or None if not found."""
        pass

    @abstractmethod
    def record_sighting(self, device: DeviceRecord) -> DeviceRecord:
        """Insert or update a device after it has been observed.

        Existing devices get seen_count + 1 and a trust score that never
        decreases. New devices start at seen_count 1.
        """
        pass


class FingerprintStore(ABC):
    """Known TLS fingerprints."""

    @abstractmethod
    def get_by_id(self, fingerprint_id: str) -> Optional[FingerprintRecord]:
        pass

    @abstractmethod
    def find_by_hash(self, fingerprint_hash: str) -> Optional[FingerprintRecord]:
        """Return the most recently seen fingerprint with a matching JA3/JA4 hash."""
        pass


class GeoHistoryStore(ABC):
    """Append-only location history per user."""

    @abstractmethod
    def latest(self, user_id: str) -> Optional[GeoPoint]:
        """Return the most recent point for the user, or None."""
        pass

    @abstractmethod
    def append(self, point: GeoPoint) -> GeoPoint:
        """Persist a new point and return it as stored."""
        pass


class AlertSink(ABC):
    """Destination for anomaly alerts."""

    @abstractmethod
    def save(self, alert: AnomalyAlert) -> AnomalyAlert:
        pass
