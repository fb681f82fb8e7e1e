"""Custom exceptions for AuthShield.

Provides a hierarchy of exceptions for different error types.
All AuthShield exceptions inherit from AuthShieldException.

Insufficient data (no baseline, no prior geolocation) is not an error
and has no exception here: it is a result state the caller handles.
"""

from typing import Any, Dict, Optional


class AuthShieldException(Exception):
    """Base exception for all AuthShield errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        details: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        code: str = "AUTHSHIELD_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(AuthShieldException):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIG_ERROR", details=details)


class InvalidInputError(AuthShieldException):
    """Raised when a request is missing required identifiers.

    Surfaced to the caller as a client error. Never retried.
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        if field_name is not None:
            details["field"] = field_name
        super().__init__(message, code="INVALID_INPUT", details=details)


class UpstreamLookupError(AuthShieldException):
    """Raised when a collaborator lookup fails or times out.

    The evaluation flow catches this and degrades to documented defaults.
    """

    def __init__(
        self,
        message: str,
        store_name: str,
        details: Optional[Dict[str, Any]] = None
    ):
        details = details or {}
        details["store_name"] = store_name
        super().__init__(message, code="UPSTREAM_LOOKUP_FAILURE", details=details)


def require_user_id(user_id: Optional[str]) -> str:
    """Return a stripped user id or raise InvalidInputError."""
    if user_id is None or not str(user_id).strip():
        raise InvalidInputError("user_id is required", field_name="user_id")
    return str(user_id).strip()
