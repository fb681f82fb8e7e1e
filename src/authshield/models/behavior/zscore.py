"""Z-score helpers for behavioral anomaly scoring."""

from typing import Optional

from authshield.common.config.scoring import ZScoreCurve


def z_score(value: float, mean: float, std_dev: float) -> float:
    """Absolute distance from the mean in standard deviations.

    Zero when std_dev is zero: a feature with no spread carries no signal.
    """
    if std_dev == 0.0:
        return 0.0
    return abs(value - mean) / std_dev


def anomaly_probability(z: float, curve: Optional[ZScoreCurve] = None) -> float:
    """Map a z-score onto an anomaly probability in [0, 1]."""
    curve = curve or ZScoreCurve()
    if z <= curve.low:
        return 0.0
    if z <= curve.mid:
        return (z - curve.low) * curve.low_slope
    if z <= curve.high:
        return curve.mid_base + (z - curve.mid) * curve.mid_slope
    return min(1.0, curve.high_base + (z - curve.high) * curve.high_slope)
