"""Configuration management - Centralized configuration for AuthShield.

Provides environment-aware configuration with sensible defaults.
All configuration is loaded from environment variables with fallbacks.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


class Environment(str, Enum):
    """Application environment."""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def _get_project_root() -> Path:
    """Get the project root directory."""
    # settings.py -> config -> common -> authshield -> src -> project_root
    current = Path(__file__).resolve()
    return current.parent.parent.parent.parent.parent


@dataclass
class Config:
    """Central configuration object for AuthShield.

    All settings can be overridden via environment variables prefixed with AUTHSHIELD_.

    Example:
        AUTHSHIELD_ENVIRONMENT=production
        AUTHSHIELD_LOG_LEVEL=INFO
        AUTHSHIELD_SCORING_POLICY_FILE=/etc/authshield/scoring_policy.yaml
    """

    # Core settings
    environment: Environment = field(
        default_factory=lambda: Environment(
            os.getenv("AUTHSHIELD_ENVIRONMENT", "development")
        )
    )
    debug: bool = field(
        default_factory=lambda: os.getenv("AUTHSHIELD_DEBUG", "false").lower() == "true"
    )
    log_level: LogLevel = field(
        default_factory=lambda: LogLevel(os.getenv("AUTHSHIELD_LOG_LEVEL", "INFO"))
    )

    # Paths
    project_root: Path = field(default_factory=_get_project_root)

    # Scoring policy (weights and thresholds). None means config/scoring_policy.yaml.
    scoring_policy_file: Optional[Path] = field(
        default_factory=lambda: (
            Path(os.environ["AUTHSHIELD_SCORING_POLICY_FILE"])
            if os.getenv("AUTHSHIELD_SCORING_POLICY_FILE")
            else None
        )
    )

    # Live activity feed
    activity_feed_enabled: bool = field(
        default_factory=lambda: os.getenv("AUTHSHIELD_ACTIVITY_FEED", "true").lower() == "true"
    )

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.scoring_policy_file is not None and not self.scoring_policy_file.exists():
            raise ValueError(
                f"AUTHSHIELD_SCORING_POLICY_FILE points to a missing file: {self.scoring_policy_file}"
            )

        # Warn about debug in production
        if self.environment == Environment.PRODUCTION and self.debug:
            import warnings
            warnings.warn(
                "Debug mode is enabled in production environment",
                RuntimeWarning,
                stacklevel=2
            )

    @property
    def config_dir(self) -> Path:
        """Get the config directory path."""
        return self.project_root / "config"

    @property
    def scoring_policy_path(self) -> Path:
        """Policy file in effect: the configured one, else config/scoring_policy.yaml."""
        return self.scoring_policy_file or self.config_dir / "scoring_policy.yaml"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == Environment.DEVELOPMENT


# Singleton instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config: The global configuration singleton.
    """
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (for testing)."""
    global _config
    _config = None
