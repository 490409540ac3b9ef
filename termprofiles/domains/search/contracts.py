"""
Search Contracts - Interfaces for the search domain and its collaborators.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from termprofiles.domains.profiles.models import Profile

from .models import Icon, ProfileMatch


@runtime_checkable
class Ranker(Protocol):
    """Contract for profile ranking implementations."""

    def rank(
        self,
        profiles: Sequence[Profile],
        terms: Sequence[str],
    ) -> list[ProfileMatch]:
        """Return matching profiles, most relevant first."""
        ...


@runtime_checkable
class TerminalApp(Protocol):
    """The terminal application, as far as the search results need it."""

    def create_icon(self, size: int) -> Icon:
        """Describe the application icon at ``size`` pixels."""
        ...


@runtime_checkable
class Launcher(Protocol):
    """Contract for starting external processes."""

    def spawn(self, command: str, *args: str) -> None:
        """Start ``command`` with ``args``; failures are not reported."""
        ...


@runtime_checkable
class SearchHost(Protocol):
    """The shell that hosts search providers."""

    def add_search_provider(self, provider: Any) -> None:
        ...

    def remove_search_provider(self, provider: Any) -> None:
        ...
