"""
Terminal Search Provider - Entry points called by the shell's search overlay.

The host enables the provider, feeds it search terms while the user types,
asks for display metadata of the results and finally activates one of them.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from termprofiles.config.errors import SearchError

from .models import ProfileMatch, ResultMeta

if TYPE_CHECKING:
    from termprofiles.config.settings import Settings
    from termprofiles.domains.profiles.contracts import ProfileSource
    from termprofiles.domains.profiles.models import Profile

    from .contracts import Launcher, Ranker, SearchHost, TerminalApp

logger = logging.getLogger(__name__)

__all__ = ["TerminalSearchProvider"]


class TerminalSearchProvider:
    """
    Search provider exposing terminal profiles to a shell.

    Example:
        >>> provider = TerminalSearchProvider(directory, ProfileRanker(), app, launcher)
        >>> provider.enable()
        >>> results = provider.get_initial_result_set(["work"])
        >>> provider.activate_result(results[0])
    """

    def __init__(
        self,
        directory: ProfileSource,
        ranker: Ranker,
        terminal_app: TerminalApp,
        launcher: Launcher,
        host: SearchHost | None = None,
        name: str = "TERMINAL PROFILES",
        terminal_command: str = "gnome-terminal",
        profile_flag: str = "--profile",
    ) -> None:
        """
        Initialize the provider.

        Args:
            directory: Source of the current profile snapshot
            ranker: Ranking implementation
            terminal_app: Terminal application providing result icons
            launcher: Process launcher used on activation
            host: Shell to register with on enable, if any
            name: Provider title shown by the shell
            terminal_command: Terminal executable
            profile_flag: Terminal flag selecting a profile by name
        """
        self.name = name
        self._directory = directory
        self._ranker = ranker
        self._terminal_app = terminal_app
        self._launcher = launcher
        self._host = host
        self._terminal_command = terminal_command
        self._profile_flag = profile_flag

    @classmethod
    def from_settings(
        cls,
        directory: ProfileSource,
        ranker: Ranker,
        terminal_app: TerminalApp,
        launcher: Launcher,
        settings: Settings,
        host: SearchHost | None = None,
    ) -> TerminalSearchProvider:
        """Create a provider configured from application settings."""
        return cls(
            directory,
            ranker,
            terminal_app,
            launcher,
            host=host,
            name=settings.provider_name,
            terminal_command=settings.terminal_command,
            profile_flag=settings.profile_flag,
        )

    def enable(self) -> None:
        """Start loading profiles and register with the host."""
        logger.debug("Enabling %s", self.name)
        self._directory.schedule_refresh()
        if self._host is not None:
            self._host.add_search_provider(self)

    def disable(self) -> None:
        """Unregister from the host."""
        logger.debug("Disabling %s", self.name)
        if self._host is not None:
            self._host.remove_search_provider(self)

    def get_initial_result_set(self, terms: Sequence[str]) -> list[ProfileMatch]:
        """Rank the current profile snapshot against ``terms``."""
        logger.debug("get_initial_result_set: %s", terms)
        try:
            return self._ranker.rank(self._directory.profiles, terms)
        except SearchError as e:
            logger.debug("Ignoring search: %s", e)
            return []

    def get_subsearch_result_set(
        self,
        previous_results: Sequence[ProfileMatch],
        terms: Sequence[str],
    ) -> list[ProfileMatch]:
        """Refine a previous search; recomputed from scratch."""
        logger.debug("get_subsearch_result_set: %s", terms)
        return self.get_initial_result_set(terms)

    def get_result_metas(self, results: Sequence[ProfileMatch | Profile]) -> list[ResultMeta]:
        """Describe results for display, one meta per result, in order."""
        logger.debug("get_result_metas: %d results", len(results))
        return [
            ResultMeta(
                id=result.identifier,
                name=result.name,
                create_icon=self._terminal_app.create_icon,
            )
            for result in results
        ]

    def activate_result(self, result: ProfileMatch | Profile) -> None:
        """Launch the terminal with the result's profile."""
        logger.info("Launching %s with profile '%s'", self._terminal_command, result.name)
        self._launcher.spawn(self._terminal_command, self._profile_flag, result.name)
