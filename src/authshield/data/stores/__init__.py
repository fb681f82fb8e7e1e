"""Store interfaces and in-memory implementations."""

from authshield.data.stores.base import (
    AlertSink,
    DeviceStore,
    FingerprintStore,
    GeoHistoryStore,
    SampleHistoryStore,
)
from authshield.data.stores.memory import (
    InMemoryAlertSink,
    InMemoryDeviceStore,
    InMemoryFingerprintStore,
    InMemoryGeoHistoryStore,
    InMemorySampleHistoryStore,
)

__all__ = [
    "AlertSink",
    "DeviceStore",
    "FingerprintStore",
    "GeoHistoryStore",
    "SampleHistoryStore",
    "InMemoryAlertSink",
    "InMemoryDeviceStore",
    "InMemoryFingerprintStore",
    "InMemoryGeoHistoryStore",
    "InMemorySampleHistoryStore",
]
