"""Unit tests for the in-memory stores and data schemas."""

from datetime import datetime, timedelta, timezone

import pytest

from authshield.data.schemas.behavioral_sample import BehavioralFeature, BehavioralSample
from authshield.data.schemas.device import DeviceRecord, FingerprintRecord
from authshield.data.schemas.geo_point import GeoPoint
from authshield.data.stores.memory import (
    InMemoryDeviceStore,
    InMemoryFingerprintStore,
    InMemoryGeoHistoryStore,
    InMemorySampleHistoryStore,
)


T0 = datetime(2026, 1, 25, 14, 0, 0, tzinfo=timezone.utc)


class TestBehavioralSample:
    """Sample schema."""

    def test_stored_pattern_names(self):
        """Stored pattern field names map onto features."""
        sample = BehavioralSample.model_validate({
            "id": "bp_1",
            "userId": "user_1",
            "avgMouseSpeed": 1.3,
            "avgKeyHoldTime": 95.0,
            "avgFlightTime": 140.0,
        })

        assert sample.sample_id == "bp_1"
        assert sample.get(BehavioralFeature.MOUSE_VELOCITY) == 1.3
        assert sample.get(BehavioralFeature.DWELL_TIME) == 95.0
        assert sample.get(BehavioralFeature.FLIGHT_TIME) == 140.0

    def test_empty_sample(self):
        assert BehavioralSample().is_empty is True
        assert BehavioralSample(typing_speed=0.0).is_empty is False


class TestSampleHistoryStore:

    def test_newest_first(self):
        store = InMemorySampleHistoryStore([
            BehavioralSample(sample_id="old", user_id="u", recorded_at=T0),
            BehavioralSample(sample_id="new", user_id="u", recorded_at=T0 + timedelta(days=1)),
            BehavioralSample(sample_id="mid", user_id="u", recorded_at=T0 + timedelta(hours=1)),
        ])
        assert [s.sample_id for s in store.list_samples("u")] == ["new", "mid", "old"]

    def test_unknown_user_has_no_history(self):
        assert InMemorySampleHistoryStore().list_samples("nobody") == []

    def test_get_sample_by_id(self):
        store = InMemorySampleHistoryStore([BehavioralSample(sample_id="bp_1", user_id="u", typing_speed=1.0)])
        assert store.get_sample("bp_1").typing_speed == 1.0
        assert store.get_sample("missing") is None

    def test_sample_needs_owner(self):
        with pytest.raises(ValueError):
            InMemorySampleHistoryStore().add(BehavioralSample(typing_speed=1.0))


class TestDeviceStore:

    def test_first_sighting(self):
        store = InMemoryDeviceStore(clock=lambda: T0)
        stored = store.record_sighting(DeviceRecord(device_id="dev_1", user_id="u", trust_score=0.4))

        assert stored.seen_count == 1
        assert stored.first_seen == T0
        assert store.get_device("dev_1") == stored

    def test_repeat_sighting_never_lowers_trust(self):
        store = InMemoryDeviceStore([DeviceRecord(device_id="dev_1", seen_count=4, trust_score=0.7)])

        stored = store.record_sighting(DeviceRecord(device_id="dev_1", trust_score=0.2))
        assert stored.seen_count == 5
        assert stored.trust_score == 0.7

        stored = store.record_sighting(DeviceRecord(device_id="dev_1", trust_score=0.9))
        assert stored.seen_count == 6
        assert stored.trust_score == 0.9

    def test_unknown_device(self):
        assert InMemoryDeviceStore().get_device("nope") is None


class TestFingerprintStore:

    def test_lookup_by_hash_prefers_most_recent(self):
        store = InMemoryFingerprintStore([
            FingerprintRecord(fingerprint_id="fp_old", ja3_hash="abc", trust_score=0.2, last_seen=T0),
            FingerprintRecord(fingerprint_id="fp_new", ja4_hash="abc", trust_score=0.9,
                              last_seen=T0 + timedelta(days=1)),
        ])
        assert store.find_by_hash("abc").fingerprint_id == "fp_new"
        assert store.find_by_hash("zzz") is None

    def test_lookup_by_id(self):
        store = InMemoryFingerprintStore()
        store.add(FingerprintRecord(fingerprint_id="fp_1", ja3_hash="abc"))
        assert store.get_by_id("fp_1").ja3_hash == "abc"


class TestGeoHistoryStore:

    def test_latest_by_timestamp(self):
        store = InMemoryGeoHistoryStore()
        store.append(GeoPoint(user_id="u", latitude=1.0, longitude=1.0, recorded_at=T0 + timedelta(hours=1)))
        store.append(GeoPoint(user_id="u", latitude=2.0, longitude=2.0, recorded_at=T0))

        assert store.latest("u").latitude == 1.0

    def test_append_stamps_missing_time(self):
        store = InMemoryGeoHistoryStore(clock=lambda: T0)
        stored = store.append(GeoPoint(user_id="u", latitude=0.0, longitude=0.0))
        assert stored.recorded_at == T0

    def test_naive_timestamps_are_utc(self):
        point = GeoPoint(user_id="u", recorded_at=datetime(2026, 1, 25, 14, 0, 0))
        assert point.recorded_at == T0

    def test_no_history(self):
        assert InMemoryGeoHistoryStore().latest("u") is None
