"""Tests for configuration settings.

Tests the Config class and environment variable handling.
"""

import os
import pytest
from pathlib import Path
from unittest.mock import patch

from authshield.common.config.settings import (
    Config,
    Environment,
    LogLevel,
    get_config,
    reset_config,
)


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the global config around every test."""
    reset_config()
    yield
    reset_config()


class TestEnvironment:
    """Tests for Environment enum."""

    def test_environment_values(self):
        """Test Environment enum values."""
        assert Environment.DEVELOPMENT.value == "development"
        assert Environment.STAGING.value == "staging"
        assert Environment.PRODUCTION.value == "production"

    def test_environment_from_string(self):
        """Test creating Environment from string."""
        assert Environment("development") == Environment.DEVELOPMENT
        assert Environment("production") == Environment.PRODUCTION


class TestLogLevel:
    """Tests for LogLevel enum."""

    def test_log_level_values(self):
        """Test LogLevel enum values."""
        assert LogLevel.DEBUG.value == "DEBUG"
        assert LogLevel.INFO.value == "INFO"
        assert LogLevel.WARNING.value == "WARNING"


class TestConfig:
    """Tests for Config class."""

    def test_default_config(self):
        """Test Config with default values."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config()

            assert config.environment == Environment.DEVELOPMENT
            assert config.debug is False
            assert config.log_level == LogLevel.INFO
            assert config.scoring_policy_file is None
            assert config.activity_feed_enabled is True

    def test_environment_from_env_var(self):
        """Test environment loaded from environment variable."""
        with patch.dict(os.environ, {"AUTHSHIELD_ENVIRONMENT": "production"}, clear=False):
            config = Config()
            assert config.environment == Environment.PRODUCTION
            assert config.is_production is True
            assert config.is_development is False

    def test_debug_mode(self):
        """Test debug mode configuration."""
        with patch.dict(os.environ, {"AUTHSHIELD_DEBUG": "true"}, clear=False):
            assert Config().debug is True

        with patch.dict(os.environ, {"AUTHSHIELD_DEBUG": "false"}, clear=False):
            assert Config().debug is False

    def test_debug_in_production_warns(self):
        with patch.dict(os.environ, {
            "AUTHSHIELD_ENVIRONMENT": "production",
            "AUTHSHIELD_DEBUG": "true",
        }, clear=False):
            with pytest.warns(RuntimeWarning):
                Config()

    def test_activity_feed_toggle(self):
        with patch.dict(os.environ, {"AUTHSHIELD_ACTIVITY_FEED": "false"}, clear=False):
            assert Config().activity_feed_enabled is False

    def test_scoring_policy_file(self, tmp_path):
        """Test policy file path from environment."""
        policy_file = tmp_path / "policy.yaml"
        policy_file.write_text("version: '2.0'\n")

        with patch.dict(os.environ, {"AUTHSHIELD_SCORING_POLICY_FILE": str(policy_file)}, clear=False):
            assert Config().scoring_policy_file == policy_file

    def test_missing_scoring_policy_file(self):
        """Test that a policy path to nowhere is rejected."""
        with patch.dict(os.environ, {
            "AUTHSHIELD_SCORING_POLICY_FILE": "/nonexistent/policy.yaml"
        }, clear=False):
            with pytest.raises(ValueError, match="AUTHSHIELD_SCORING_POLICY_FILE"):
                Config()

    def test_config_dir_property(self):
        """Test config_dir property."""
        config = Config()
        assert config.config_dir == config.project_root / "config"
        assert isinstance(config.project_root, Path)

    def test_scoring_policy_path_defaults_to_config_dir(self):
        """Test that the shipped policy file is used when none is configured."""
        with patch.dict(os.environ, {}, clear=True):
            config = Config()
        assert config.scoring_policy_path == config.config_dir / "scoring_policy.yaml"
        assert config.scoring_policy_path.exists()

    def test_scoring_policy_path_prefers_environment(self, tmp_path):
        """Test that AUTHSHIELD_SCORING_POLICY_FILE overrides the shipped file."""
        policy_file = tmp_path / "custom.yaml"
        policy_file.write_text("version: custom\n")

        with patch.dict(os.environ, {"AUTHSHIELD_SCORING_POLICY_FILE": str(policy_file)}, clear=False):
            assert Config().scoring_policy_path == policy_file


class TestGetConfig:
    """Tests for get_config singleton function."""

    def test_get_config_returns_config(self):
        """Test that get_config returns a Config instance."""
        assert isinstance(get_config(), Config)

    def test_get_config_returns_same_instance(self):
        """Test that get_config returns the same instance."""
        assert get_config() is get_config()

    def test_reset_config(self):
        """Test that reset_config creates new instance."""
        first = get_config()
        reset_config()
        assert get_config() is not first
