"""Unit tests for the Geo-Velocity Detector.

Testing discipline: Light but mandatory.
- One happy path test
- One edge case test
- One weird but valid input test
"""

import math
from datetime import datetime, timedelta, timezone

import pytest

from authshield.agents.geo.agent import (
    GeoVelocityDetector,
    detect_impossible_travel,
    haversine_km,
)
from authshield.common.exceptions import InvalidInputError
from authshield.core.types import Severity
from authshield.data.schemas.geo_point import GeoPoint
from authshield.data.schemas.requests import ImpossibleTravelRequest
from authshield.data.stores.memory import InMemoryGeoHistoryStore


T0 = datetime(2026, 1, 25, 14, 0, 0, tzinfo=timezone.utc)


def equator_point(km_east: float, at: datetime, **kwargs) -> GeoPoint:
    """Point on the equator a given great-circle distance east of (0, 0)."""
    return GeoPoint(
        user_id="user_1",
        latitude=0.0,
        longitude=math.degrees(km_east / 6371.0),
        recorded_at=at,
        **kwargs,
    )


class FixedClock:
    """Clock returning queued timestamps in order."""

    def __init__(self, *times: datetime):
        self._times = list(times)

    def __call__(self) -> datetime:
        return self._times.pop(0)


class TestHaversine:
    """Great-circle distance."""

    def test_same_point_is_zero(self):
        assert haversine_km(40.7128, -74.0060, 40.7128, -74.0060) == pytest.approx(0.0)

    def test_new_york_to_london(self):
        """Roughly 5570 km."""
        distance = haversine_km(40.7128, -74.0060, 51.5074, -0.1278)
        assert distance == pytest.approx(5570, abs=10)


class TestGeoVelocityCheckHappyPath:
    """Happy path tests for the pure check."""

    def test_plausible_drive(self):
        """300 km in 3 hours is 100 km/h and not impossible."""
        prior = equator_point(0.0, T0)
        current = equator_point(300.0, T0 + timedelta(hours=3))

        verdict = detect_impossible_travel("user_1", current, prior)

        assert verdict.distance_km == pytest.approx(300.0)
        assert verdict.required_speed_kmh == pytest.approx(100.0)
        assert verdict.impossible_travel is False
        assert verdict.risk_score == 0.0
        assert verdict.severity is None

    def test_intercontinental_jump(self):
        """2000 km in 10 minutes needs 12000 km/h."""
        prior = equator_point(0.0, T0)
        current = equator_point(2000.0, T0 + timedelta(minutes=10))

        verdict = detect_impossible_travel("user_1", current, prior)

        assert verdict.required_speed_kmh == pytest.approx(12000.0)
        assert verdict.impossible_travel is True
        assert verdict.severity == Severity.CRITICAL
        assert verdict.risk_score == pytest.approx(1.0)
        assert verdict.time_delta_minutes == pytest.approx(10.0)

    def test_factor_map(self):
        """Factors carry the flag, distance, minutes and speed."""
        prior = equator_point(0.0, T0)
        current = equator_point(3000.0, T0 + timedelta(hours=1))

        verdict = detect_impossible_travel("user_1", current, prior)

        assert verdict.factors["impossible_travel"] is True
        assert verdict.factors["travel_distance_km"] == pytest.approx(3000.0)
        assert verdict.factors["time_delta_minutes"] == pytest.approx(60.0)
        assert verdict.factors["required_speed_kmh"] == pytest.approx(3000.0)
        assert verdict.severity == Severity.HIGH
        assert verdict.risk_score == pytest.approx(0.3)


class TestGeoVelocityCheckEdgeCases:
    """Edge cases for the pure check."""

    def test_no_prior_location(self):
        """First login has nothing to compare against."""
        verdict = detect_impossible_travel("user_1", equator_point(0.0, T0), None)

        assert verdict.has_prior_location is False
        assert verdict.impossible_travel is False
        assert verdict.distance_km is None
        assert verdict.factors == {"impossible_travel": False}

    def test_prior_without_coordinates(self):
        """A prior point with no coordinates is not usable."""
        prior = GeoPoint(user_id="user_1", recorded_at=T0)
        verdict = detect_impossible_travel("user_1", equator_point(10.0, T0), prior)
        assert verdict.has_prior_location is False

    def test_zero_elapsed_time_is_infinite_speed(self):
        """No elapsed time means any distance is impossible."""
        prior = equator_point(0.0, T0)
        current = equator_point(50.0, T0)

        verdict = detect_impossible_travel("user_1", current, prior)

        assert math.isinf(verdict.required_speed_kmh)
        assert verdict.impossible_travel is True
        assert verdict.severity == Severity.CRITICAL
        assert verdict.risk_score == 1.0

    @pytest.mark.parametrize("km_per_hour,impossible", [(950.0, False), (1050.0, True)])
    def test_speed_threshold(self, km_per_hour, impossible):
        """Above 1000 km/h is impossible travel."""
        prior = equator_point(0.0, T0)
        current = equator_point(km_per_hour, T0 + timedelta(hours=1))
        verdict = GeoVelocityDetector().check("user_1", current, prior, now=T0 + timedelta(hours=1))
        assert verdict.impossible_travel is impossible

    def test_missing_user_id_raises(self):
        with pytest.raises(InvalidInputError):
            detect_impossible_travel("", equator_point(0.0, T0), None)


class TestDetectAndRecord:
    """History-backed detection."""

    def test_every_point_is_recorded(self):
        """Points are appended whatever the verdict."""
        clock = FixedClock(T0, T0 + timedelta(minutes=10))
        detector = GeoVelocityDetector(clock=clock)
        history = InMemoryGeoHistoryStore()

        first = detector.detect_and_record(
            ImpossibleTravelRequest(user_id="user_1", ip_address="203.0.113.10",
                                    latitude=40.7128, longitude=-74.0060, city="New York"),
            history,
        )
        second = detector.detect_and_record(
            ImpossibleTravelRequest(user_id="user_1", ip_address="198.51.100.7",
                                    latitude=51.5074, longitude=-0.1278, city="London"),
            history,
        )

        assert first.impossible_travel is False
        assert second.impossible_travel is True
        assert second.previous_point.city == "New York"

        points = history.history("user_1")
        assert [p.city for p in points] == ["London", "New York"]
        assert points[0].risk_score == pytest.approx(second.risk_score)
        assert points[1].risk_score == 0.0
        assert second.current_point.recorded_at == T0 + timedelta(minutes=10)

    def test_users_are_independent(self):
        """One user's history never affects another's."""
        clock = FixedClock(T0, T0 + timedelta(minutes=1))
        detector = GeoVelocityDetector(clock=clock)
        history = InMemoryGeoHistoryStore()

        detector.detect_and_record(
            ImpossibleTravelRequest(user_id="alice", ip_address="1.1.1.1", latitude=0.0, longitude=0.0),
            history,
        )
        verdict = detector.detect_and_record(
            ImpossibleTravelRequest(user_id="bob", ip_address="2.2.2.2", latitude=50.0, longitude=50.0),
            history,
        )
        assert verdict.has_prior_location is False

    def test_camel_case_request(self):
        """Client payloads in camelCase are accepted."""
        request = ImpossibleTravelRequest.model_validate(
            {"userId": "user_1", "ipAddress": "1.2.3.4", "latitude": 1.0, "longitude": 2.0}
        )
        assert request.user_id == "user_1"
        assert request.ip_address == "1.2.3.4"
