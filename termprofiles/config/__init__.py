"""
Configuration - Application settings and error taxonomy.
"""

from .errors import (
    ErrorCode,
    LaunchError,
    MalformedReplyError,
    SearchError,
    StoreError,
    StoreUnavailableError,
    TermProfilesError,
)
from .settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Errors
    "ErrorCode",
    "TermProfilesError",
    "StoreError",
    "StoreUnavailableError",
    "MalformedReplyError",
    "SearchError",
    "LaunchError",
]
