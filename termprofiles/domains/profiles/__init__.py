"""
Profiles Domain - Terminal profiles synchronized from the configuration store.

This domain handles:
- Profile identifier list lookup
- Concurrent display-name lookups
- Atomic snapshot publishing with generation tracking
- Validated store replies
"""

from .contracts import ConfigStore, ProfileSource
from .directory import ProfileDirectory
from .models import Profile, StoreReply, StoreValue

__all__ = [
    "ConfigStore",
    "ProfileSource",
    "ProfileDirectory",
    "Profile",
    "StoreReply",
    "StoreValue",
]
