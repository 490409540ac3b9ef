"""
Error Taxonomy - Consistent error codes across the application.

Usage:
    from termprofiles.config.errors import ErrorCode, TermProfilesError

    raise TermProfilesError(ErrorCode.STORE_UNAVAILABLE, "dconf not installed")
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standardized error codes for machine-readable error reports."""

    # Configuration store errors
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
    STORE_MALFORMED_REPLY = "STORE_MALFORMED_REPLY"
    STORE_LOOKUP_FAILED = "STORE_LOOKUP_FAILED"

    # Search errors
    SEARCH_INVALID_QUERY = "SEARCH_INVALID_QUERY"

    # Launch errors
    LAUNCH_FAILED = "LAUNCH_FAILED"

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"


class TermProfilesError(Exception):
    """Base exception with error code support."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code.value}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary for structured log records."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


# Domain-specific exceptions for cleaner imports
class StoreError(TermProfilesError):
    """A configuration store lookup returned a failure status."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.STORE_LOOKUP_FAILED, message, details)


class StoreUnavailableError(TermProfilesError):
    """The configuration store could not be reached at all."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.STORE_UNAVAILABLE, message, details)


class MalformedReplyError(TermProfilesError):
    """The configuration store answered with a reply of the wrong shape."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.STORE_MALFORMED_REPLY, message, details)


class SearchError(TermProfilesError):
    """Search domain errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.SEARCH_INVALID_QUERY, message, details)


class LaunchError(TermProfilesError):
    """Terminal launch errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.LAUNCH_FAILED, message, details)
