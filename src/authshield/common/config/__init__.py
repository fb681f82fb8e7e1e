"""Configuration module - environment settings and scoring policy."""

from authshield.common.config.settings import (
    Config,
    Environment,
    LogLevel,
    get_config,
    reset_config,
)
from authshield.common.config.scoring import (
    ScoringPolicy,
    BehaviorScoringConfig,
    TrustConfig,
    TrustWeights,
    GeoConfig,
    EscalationConfig,
    ZScoreCurve,
    load_scoring_policy,
)

__all__ = [
    "Config",
    "Environment",
    "LogLevel",
    "get_config",
    "reset_config",
    "ScoringPolicy",
    "BehaviorScoringConfig",
    "TrustConfig",
    "TrustWeights",
    "GeoConfig",
    "EscalationConfig",
    "ZScoreCurve",
    "load_scoring_policy",
]
