"""Centralized constants for AuthShield runtime plumbing.

Scoring weights and thresholds are not here; they belong to ScoringPolicy.
"""


# ===== LIVE ACTIVITY FEED =====
class ActivityConstants:
    QUEUE_SIZE = 10000
    FLUSH_TIMEOUT_SECONDS = 5.0
    QUEUE_GET_TIMEOUT = 1.0


# ===== ALERTS =====
class AlertConstants:
    UNKNOWN_PLACE = "Unknown"
    UNKNOWN_FACTOR = "unknown"
