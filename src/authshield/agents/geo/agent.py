"""Geo-Velocity Detector - flags physically implausible movement between logins.

Compares the user's most recent recorded location with the new one using
the great-circle (haversine) distance and the time elapsed since the
previous observation. Independent of behavioral scoring: it looks only at
location continuity.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Callable, Optional

from authshield.agents.geo.schema import ImpossibleTravelVerdict
from authshield.common.config.scoring import GeoConfig
from authshield.common.exceptions import require_user_id
from authshield.core.types import Severity
from authshield.data.schemas.geo_point import GeoPoint
from authshield.data.schemas.requests import ImpossibleTravelRequest
from authshield.data.stores.base import GeoHistoryStore


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def haversine_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    radius_km: float = 6371.0,
) -> float:
    """Great-circle distance between two coordinates in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius_km * c


class GeoVelocityDetector:
    """Geo-Velocity Detector.

    Responsibilities:
    - Distance, elapsed time and required speed between consecutive locations
    - Impossible-travel flag, risk value and severity
    - Recording every new location (detect_and_record)

    Constraints:
    - check() is pure
    - detect_and_record() touches only the history store it is given
    """

    def __init__(
        self,
        config: Optional[GeoConfig] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """Initialize the detector.

        Args:
            config: Speed thresholds and earth radius
            clock: Source of "now" for elapsed-time computation
        """
        self.config = config or GeoConfig()
        self._clock = clock

    def check(
        self,
        user_id: str,
        new_point: GeoPoint,
        prior_point: Optional[GeoPoint],
        now: Optional[datetime] = None,
    ) -> ImpossibleTravelVerdict:
        """Evaluate the move from prior_point to new_point.

        Args:
            user_id: User being evaluated
            new_point: The location just observed
            prior_point: The user's most recent recorded location, if any
            now: Time of the new observation. Defaults to new_point.recorded_at, then the clock.

        Returns:
            ImpossibleTravelVerdict; without a usable prior point it carries
            no distance and impossible_travel False.
        """
        if now is None:
            now = new_point.recorded_at or self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        usable = (
            prior_point is not None
            and prior_point.has_coordinates
            and prior_point.recorded_at is not None
            and new_point.has_coordinates
        )
        if not usable:
            return ImpossibleTravelVerdict(
                user_id=user_id,
                previous_point=prior_point,
                current_point=new_point,
                factors={"impossible_travel": False},
            )

        distance_km = haversine_km(
            prior_point.latitude,
            prior_point.longitude,
            new_point.latitude,
            new_point.longitude,
            radius_km=self.config.earth_radius_km,
        )
        hours = max(0.0, (now - prior_point.recorded_at).total_seconds() / 3600.0)
        speed = distance_km / hours if hours > 0.0 else math.inf

        impossible = speed > self.config.impossible_speed_kmh
        risk_score = 0.0
        severity = None
        if impossible:
            risk_score = min(1.0, speed / self.config.risk_speed_normalizer_kmh)
            severity = Severity.CRITICAL if speed > self.config.critical_speed_kmh else Severity.HIGH

        return ImpossibleTravelVerdict(
            user_id=user_id,
            impossible_travel=impossible,
            distance_km=distance_km,
            time_delta_hours=hours,
            required_speed_kmh=speed,
            risk_score=risk_score,
            severity=severity,
            previous_point=prior_point,
            current_point=new_point,
            factors={
                "impossible_travel": impossible,
                "travel_distance_km": distance_km,
                "time_delta_minutes": hours * 60.0,
                "required_speed_kmh": speed,
            },
        )

    def detect_and_record(
        self,
        request: ImpossibleTravelRequest,
        history: GeoHistoryStore,
    ) -> ImpossibleTravelVerdict:
        """Check a new location against history and append it.

        The new point is always recorded, carrying the risk score when
        impossible travel was flagged and 0 otherwise.

        Raises:
            InvalidInputError: If user_id is missing
            UpstreamLookupError: If the history store fails
        """
        user_id = require_user_id(request.user_id)
        now = self._clock()

        prior = history.latest(user_id)
        candidate = GeoPoint(
            user_id=user_id,
            latitude=request.latitude,
            longitude=request.longitude,
            city=request.city,
            country=request.country,
            ip_address=request.ip_address or "",
            session_id=request.session_id,
            recorded_at=now,
        )
        verdict = self.check(user_id, candidate, prior, now=now)

        stored = history.append(candidate.model_copy(update={"risk_score": verdict.risk_score}))

        if verdict.impossible_travel:
            logger.warning(
                f"Impossible travel for user {user_id}: "
                f"{verdict.distance_km:.0f} km at {verdict.required_speed_kmh:.0f} km/h"
            )
        return verdict.model_copy(update={"current_point": stored})


def detect_impossible_travel(
    user_id: str,
    new_point: GeoPoint,
    prior_point: Optional[GeoPoint],
    now: Optional[datetime] = None,
    config: Optional[GeoConfig] = None,
) -> ImpossibleTravelVerdict:
    """Pure entry point: impossible-travel verdict for two locations."""
    return GeoVelocityDetector(config).check(
        require_user_id(user_id), new_point, prior_point, now=now
    )
