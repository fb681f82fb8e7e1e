"""Core types and enums."""

from enum import Enum
from typing import TypeVar


T = TypeVar("T")


class Recommendation(str, Enum):
    """Three-tier authentication decision."""
    ALLOW = "allow"
    STEP_UP = "step_up"
    BLOCK = "block"


class ConfidenceLevel(str, Enum):
    """How much the verdict can be relied upon."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Severity(str, Enum):
    """Alert and anomaly severity."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AlertType(str, Enum):
    """Kinds of anomaly alert raised by the core."""
    BEHAVIORAL = "behavioral"
    IMPOSSIBLE_TRAVEL = "impossible_travel"


def clamp01(value: float) -> float:
    """Clamp a score into [0, 1]."""
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return float(value)


def tier(value: float, upper: float, lower: float, top: T, middle: T, bottom: T) -> T:
    """Pick one of three tiers: value >= upper, value >= lower, else bottom."""
    if value >= upper:
        return top
    if value >= lower:
        return middle
    return bottom
