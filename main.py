#!/usr/bin/env python3
"""Main entry point for AuthShield.

Loads the scoring policy and runs one evaluation against in-memory stores:
a user with a short behavioral history logs in from New York, then from
London ten minutes later.
"""

from datetime import datetime, timedelta, timezone

from authshield.common.config import Config, load_scoring_policy
from authshield.common.logging import get_logger
from authshield.data.schemas import BehavioralSample, DeviceRecord, RiskRequest
from authshield.data.stores import (
    InMemoryAlertSink,
    InMemoryDeviceStore,
    InMemoryGeoHistoryStore,
    InMemorySampleHistoryStore,
)
from authshield.governance.events import ActivityHub
from authshield.orchestration import RiskEvaluationFlow

logger = get_logger(__name__)


class _LogListener:
    """Activity listener that writes events to the log."""

    def send(self, message):
        activity = message["activity"]
        logger.info(f"[activity] {activity['message']} (risk={activity['risk_score']:.2f})")


def main():
    """Main entry point."""
    config = Config()
    logger.info(f"AuthShield initialized in {config.environment.value} mode")
    logger.info(f"Project root: {config.project_root}")

    policy = load_scoring_policy(config.scoring_policy_path)
    logger.info(f"Scoring policy version {policy.version}")

    start = datetime.now(timezone.utc)
    clock_times = iter([start, start + timedelta(minutes=10)])

    samples = InMemorySampleHistoryStore([
        BehavioralSample(user_id="user_demo", mouse_velocity=1.40, dwell_time=95.0, typing_speed=210.0),
        BehavioralSample(user_id="user_demo", mouse_velocity=1.52, dwell_time=101.0, typing_speed=222.0),
        BehavioralSample(user_id="user_demo", mouse_velocity=1.31, dwell_time=92.0, typing_speed=205.0),
    ])
    devices = InMemoryDeviceStore([
        DeviceRecord(device_id="dev_demo", user_id="user_demo", seen_count=8, trust_score=0.8),
    ])
    alerts = InMemoryAlertSink()
    hub = None
    if config.activity_feed_enabled:
        hub = ActivityHub()
        hub.subscribe(_LogListener())

    flow = RiskEvaluationFlow(
        samples=samples,
        devices=devices,
        geo_history=InMemoryGeoHistoryStore(),
        alert_sink=alerts,
        hub=hub,
        policy=policy,
        clock=lambda: next(clock_times),
    )

    current = BehavioralSample(mouse_velocity=1.45, dwell_time=97.0, typing_speed=215.0)
    logins = [
        ("203.0.113.10", 40.7128, -74.0060, "New York", "US"),
        ("198.51.100.7", 51.5074, -0.1278, "London", "GB"),
    ]
    for ip_address, latitude, longitude, city, country in logins:
        verdict = flow.evaluate(RiskRequest(
            user_id="user_demo",
            device_id="dev_demo",
            current_behavior=current,
            ip_address=ip_address,
            latitude=latitude,
            longitude=longitude,
            city=city,
            country=country,
        ))
        logger.info(
            f"{city}: score={verdict.overall_score:.2f} "
            f"recommendation={verdict.recommendation.value} escalated={verdict.escalated}"
        )

    logger.info(f"Alerts raised: {len(alerts.alerts)}")


if __name__ == "__main__":
    main()
