"""In-memory store implementations.

Used by tests, demos and single-process deployments. Each store guards its
data with a lock so concurrent evaluations for different users are safe.
"""

import threading
from collections import defaultdict
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from authshield.data.schemas.alert import AnomalyAlert
from authshield.data.schemas.behavioral_sample import BehavioralSample
from authshield.data.schemas.device import DeviceRecord, FingerprintRecord
from authshield.data.schemas.geo_point import GeoPoint
from authshield.data.stores.base import (
    AlertSink,
    DeviceStore,
    FingerprintStore,
    GeoHistoryStore,
    SampleHistoryStore,
)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemorySampleHistoryStore(SampleHistoryStore):
    """Samples kept in insertion order; newest first on read."""

    def __init__(self, samples: Optional[Iterable[BehavioralSample]] = None):
        self._lock = threading.Lock()
        self._by_user: Dict[str, List[BehavioralSample]] = defaultdict(list)
        self._by_id: Dict[str, BehavioralSample] = {}
        for sample in samples or ():
            self.add(sample)

    def add(self, sample: BehavioralSample) -> BehavioralSample:
        if not sample.user_id:
            raise ValueError("stored samples need a user_id")
        with self._lock:
            self._by_user[sample.user_id].append(sample)
            if sample.sample_id:
                self._by_id[sample.sample_id] = sample
        return sample

    def list_samples(self, user_id: str) -> List[BehavioralSample]:
        with self._lock:
            samples = list(self._by_user.get(user_id, ()))
        # Stable sort keeps later insertions first among equal timestamps
        samples.reverse()
        return sorted(samples, key=lambda s: s.recorded_at or _EPOCH, reverse=True)

    def get_sample(self, sample_id: str) -> Optional[BehavioralSample]:
        with self._lock:
            return self._by_id.get(sample_id)


class InMemoryDeviceStore(DeviceStore):

    def __init__(
        self,
        devices: Optional[Iterable[DeviceRecord]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._lock = threading.Lock()
        self._devices: Dict[str, DeviceRecord] = {}
        self._clock = clock
        for device in devices or ():
            self._devices[device.device_id] = device

    def get_device(self, device_id: str) -> Optional[DeviceRecord]:
        with self._lock:
            return self._devices.get(device_id)

    def record_sighting(self, device: DeviceRecord) -> DeviceRecord:
        now = self._clock()
        with self._lock:
            existing = self._devices.get(device.device_id)
            if existing is None:
                stored = device.model_copy(
                    update={"first_seen": now, "last_seen": now, "seen_count": 1}
                )
            else:
                trust = existing.trust_score
                if device.trust_score is not None:
                    # Trust evolves upward, it is never reset by a new sighting
                    trust = max(trust or 0.0, device.trust_score)
                stored = existing.model_copy(
                    update={
                        "last_seen": now,
                        "seen_count": (existing.seen_count or 0) + 1,
                        "trust_score": trust,
                    }
                )
            self._devices[device.device_id] = stored
            return stored


class InMemoryFingerprintStore(FingerprintStore):

    def __init__(self, fingerprints: Optional[Iterable[FingerprintRecord]] = None):
        self._lock = threading.Lock()
        self._fingerprints: Dict[str, FingerprintRecord] = {}
        for fingerprint in fingerprints or ():
            self._fingerprints[fingerprint.fingerprint_id] = fingerprint

    def add(self, fingerprint: FingerprintRecord) -> FingerprintRecord:
        with self._lock:
            self._fingerprints[fingerprint.fingerprint_id] = fingerprint
        return fingerprint

    def get_by_id(self, fingerprint_id: str) -> Optional[FingerprintRecord]:
        with self._lock:
            return self._fingerprints.get(fingerprint_id)

    def find_by_hash(self, fingerprint_hash: str) -> Optional[FingerprintRecord]:
        with self._lock:
            candidates = list(self._fingerprints.values())
        candidates.sort(key=lambda f: f.last_seen or _EPOCH, reverse=True)
        for fingerprint in candidates:
            if fingerprint.matches(fingerprint_hash):
                return fingerprint
        return None


class InMemoryGeoHistoryStore(GeoHistoryStore):
    """Append-only point history; points without a timestamp get the store clock."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._lock = threading.Lock()
        self._history: Dict[str, List[GeoPoint]] = defaultdict(list)
        self._clock = clock

    def latest(self, user_id: str) -> Optional[GeoPoint]:
        with self._lock:
            points = self._history.get(user_id)
            if not points:
                return None
            return max(reversed(points), key=lambda p: p.recorded_at or _EPOCH)

    def append(self, point: GeoPoint) -> GeoPoint:
        if point.recorded_at is None:
            point = point.model_copy(update={"recorded_at": self._clock()})
        with self._lock:
            self._history[point.user_id].append(point)
        return point

    def history(self, user_id: str) -> List[GeoPoint]:
        """All points for a user, newest first."""
        with self._lock:
            points = list(self._history.get(user_id, ()))
        return sorted(points, key=lambda p: p.recorded_at or _EPOCH, reverse=True)


class InMemoryAlertSink(AlertSink):

    def __init__(self):
        self._lock = threading.Lock()
        self._alerts: List[AnomalyAlert] = []

    def save(self, alert: AnomalyAlert) -> AnomalyAlert:
        with self._lock:
            self._alerts.append(alert)
        return alert

    @property
    def alerts(self) -> List[AnomalyAlert]:
        with self._lock:
            return list(self._alerts)
