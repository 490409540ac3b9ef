"""
Profile Contracts - Interfaces for the profile directory domain.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import Profile, StoreReply


@runtime_checkable
class ConfigStore(Protocol):
    """
    Contract for configuration store clients.

    Implementations raise StoreUnavailableError when the store cannot be
    reached and MalformedReplyError when the reply has the wrong shape.
    """

    async def lookup(
        self,
        path: str,
        locale: str,
        use_schema_default: bool,
    ) -> StoreReply:
        """Look up the value stored at ``path``."""
        ...


@runtime_checkable
class ProfileSource(Protocol):
    """Contract for anything holding a refreshable profile snapshot."""

    @property
    def profiles(self) -> tuple[Profile, ...]:
        """Currently published profiles."""
        ...

    async def refresh(self) -> None:
        """Reload profiles from the backing store."""
        ...

    def schedule_refresh(self) -> None:
        """Start a refresh without waiting for it."""
        ...
