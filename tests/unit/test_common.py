"""Unit tests for the exception hierarchy, logging helper and tier selection."""

import logging

import pytest

from authshield.common.exceptions import (
    AuthShieldException,
    ConfigurationError,
    InvalidInputError,
    UpstreamLookupError,
    require_user_id,
)
from authshield.common.logging import get_logger
from authshield.core.types import Recommendation, tier


class TestExceptions:

    def test_invalid_input_to_dict(self):
        error = InvalidInputError("user_id is required", field_name="user_id")
        assert error.to_dict() == {
            "error": "INVALID_INPUT",
            "message": "user_id is required",
            "details": {"field": "user_id"},
        }

    def test_upstream_lookup_carries_store(self):
        error = UpstreamLookupError("timed out", store_name="devices")
        assert error.code == "UPSTREAM_LOOKUP_FAILURE"
        assert error.details["store_name"] == "devices"

    def test_hierarchy(self):
        for error in (
            ConfigurationError("bad"),
            InvalidInputError("bad"),
            UpstreamLookupError("bad", store_name="geo"),
        ):
            assert isinstance(error, AuthShieldException)

    def test_require_user_id_strips(self):
        assert require_user_id("  user_1 ") == "user_1"

    @pytest.mark.parametrize("user_id", [None, "", "\t"])
    def test_require_user_id_rejects_blank(self, user_id):
        with pytest.raises(InvalidInputError):
            require_user_id(user_id)


class TestGetLogger:

    def test_single_handler(self):
        logger = get_logger("authshield.test.single", level="DEBUG")
        get_logger("authshield.test.single", level="DEBUG")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_level_from_config(self):
        logger = get_logger("authshield.test.config")
        assert logger.level in (logging.DEBUG, logging.INFO, logging.WARNING,
                                logging.ERROR, logging.CRITICAL)


class TestTier:

    @pytest.mark.parametrize("value,expected", [
        (0.72, Recommendation.ALLOW),
        (0.71, Recommendation.STEP_UP),
        (0.45, Recommendation.STEP_UP),
        (0.44, Recommendation.BLOCK),
    ])
    def test_boundaries_are_inclusive(self, value, expected):
        result = tier(value, 0.72, 0.45, Recommendation.ALLOW, Recommendation.STEP_UP, Recommendation.BLOCK)
        assert result is expected
