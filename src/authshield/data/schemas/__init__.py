"""Data schemas - canonical Pydantic definitions."""

from authshield.data.schemas.behavioral_sample import BehavioralFeature, BehavioralSample
from authshield.data.schemas.geo_point import GeoPoint
from authshield.data.schemas.device import DeviceRecord, FingerprintRecord
from authshield.data.schemas.alert import AnomalyAlert, ActivityEvent
from authshield.data.schemas.requests import ImpossibleTravelRequest, RiskRequest

__all__ = [
    "BehavioralFeature",
    "BehavioralSample",
    "GeoPoint",
    "DeviceRecord",
    "FingerprintRecord",
    "AnomalyAlert",
    "ActivityEvent",
    "ImpossibleTravelRequest",
    "RiskRequest",
]
