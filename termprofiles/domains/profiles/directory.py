"""
Profile Directory - Eventually-consistent list of terminal profiles.

Features:
- Profile list lookup followed by concurrent per-profile name lookups
- Generation-tagged refreshes; superseded refreshes never publish
- Snapshot published in one step, so readers never see a partial list
- Failed lookups are logged and dropped, never raised
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from pydantic import ValidationError

from termprofiles.config.errors import ErrorCode, TermProfilesError

from .models import Profile

if TYPE_CHECKING:
    from termprofiles.config.settings import Settings

    from .contracts import ConfigStore

logger = logging.getLogger(__name__)

__all__ = ["ProfileDirectory"]


class ProfileDirectory:
    """
    In-memory directory of profiles backed by a configuration store.

    Example:
        >>> directory = ProfileDirectory.from_settings(DconfStore(), get_settings())
        >>> await directory.refresh()
        >>> [p.name for p in directory.profiles]
        ['Default', 'Work SSH']
    """

    def __init__(
        self,
        store: ConfigStore,
        list_path: str,
        name_path_template: str,
        locale: str = "en_US.UTF-8",
        use_schema_default: bool = True,
    ) -> None:
        """
        Initialize the directory.

        Args:
            store: Configuration store client
            list_path: Path holding the list of profile identifiers
            name_path_template: Path of a profile's display name, with an
                ``{identifier}`` placeholder
            locale: Locale passed to every lookup
            use_schema_default: Fall back to schema defaults for unset keys
        """
        self._store = store
        self._list_path = list_path
        self._name_path_template = name_path_template
        self._locale = locale
        self._use_schema_default = use_schema_default

        self._profiles: tuple[Profile, ...] = ()
        self._generation = 0
        self._tasks: set[asyncio.Task[None]] = set()

    @classmethod
    def from_settings(cls, store: ConfigStore, settings: Settings) -> ProfileDirectory:
        """Create a directory configured from application settings."""
        return cls(
            store,
            list_path=settings.profile_list_path,
            name_path_template=settings.profile_name_path,
            locale=settings.store_locale,
            use_schema_default=settings.store_use_schema_default,
        )

    @property
    def profiles(self) -> tuple[Profile, ...]:
        """Most recently published snapshot."""
        return self._profiles

    @property
    def generation(self) -> int:
        """Number of the most recent refresh that read a profile list."""
        return self._generation

    async def refresh(self) -> None:
        """
        Reload the profile list from the store.

        A failed or malformed list lookup leaves the cached snapshot as it
        was and does not supersede refreshes still in flight. A failed name
        lookup drops only that profile.
        """
        logger.debug("Reloading profiles")

        try:
            reply = await self._store.lookup(
                self._list_path, self._locale, self._use_schema_default
            )
            identifiers: list[str] = reply.raise_for_status().payload_as(list[str])
        except TermProfilesError as e:
            logger.warning(
                "Profile list lookup failed, keeping %d cached profiles: %s",
                len(self._profiles),
                e,
                extra={"error": e.to_dict()},
            )
            return

        # Only a refresh holding a newer list may supersede older ones
        self._generation += 1
        generation = self._generation
        logger.debug("Looking up %d profiles (generation %d)", len(identifiers), generation)

        profiles: list[Profile] = []
        lookups = [self._lookup_profile(identifier) for identifier in identifiers]
        for lookup in asyncio.as_completed(lookups):
            profile = await lookup
            if profile is not None:
                profiles.append(profile)

        if generation != self._generation:
            logger.debug(
                "Discarding superseded refresh (generation %d, current %d)",
                generation,
                self._generation,
            )
            return

        self._profiles = tuple(profiles)
        logger.info(
            "Loaded %d of %d profiles (generation %d)",
            len(profiles),
            len(identifiers),
            generation,
        )

    async def _lookup_profile(self, identifier: str) -> Profile | None:
        """Look up one profile's display name; None if it cannot be loaded."""
        path = self._name_path_template.format(identifier=identifier)
        try:
            reply = await self._store.lookup(path, self._locale, self._use_schema_default)
            name: str = reply.raise_for_status().payload_as(str)
            return Profile(identifier=identifier, name=name)
        except TermProfilesError as e:
            error = e
        except ValidationError as e:
            error = TermProfilesError(
                ErrorCode.VALIDATION_ERROR,
                f"Invalid profile data: {e}",
                {"identifier": identifier},
            )
        except Exception as e:
            error = TermProfilesError(
                ErrorCode.INTERNAL_ERROR,
                f"{type(e).__name__}: {e}",
                {"identifier": identifier, "path": path},
            )
        logger.warning(
            "Dropping profile %s: %s", identifier, error, extra={"error": error.to_dict()}
        )
        return None

    def schedule_refresh(self) -> asyncio.Task[None]:
        """
        Start a refresh in the background and return immediately.

        Must be called from within a running event loop.
        """
        task = asyncio.create_task(self.refresh())
        self._tasks.add(task)
        task.add_done_callback(self._on_refresh_done)
        return task

    def _on_refresh_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Profile refresh crashed: %s", exc, exc_info=exc)

    async def wait_idle(self) -> None:
        """Wait for all scheduled refreshes to finish."""
        while self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)
