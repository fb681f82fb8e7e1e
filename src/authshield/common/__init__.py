"""Common utilities - logging, config, exceptions."""

from authshield.common.logging.logger import get_logger
from authshield.common.config import (
    Config,
    get_config,
    reset_config,
    ScoringPolicy,
    load_scoring_policy,
)
from authshield.common.exceptions import (
    AuthShieldException,
    ConfigurationError,
    InvalidInputError,
    UpstreamLookupError,
    require_user_id,
)

__all__ = [
    # Logging
    "get_logger",
    # Config
    "Config",
    "get_config",
    "reset_config",
    "ScoringPolicy",
    "load_scoring_policy",
    # Exceptions
    "AuthShieldException",
    "ConfigurationError",
    "InvalidInputError",
    "UpstreamLookupError",
    "require_user_id",
]
