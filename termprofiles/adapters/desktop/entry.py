"""
Desktop Entry App - Terminal application described by its .desktop file.

Looks the entry up in the XDG data directories and reads its ``Icon`` key.
"""

from __future__ import annotations

import configparser
import logging
import os
from pathlib import Path

from termprofiles.domains.search.models import Icon

logger = logging.getLogger(__name__)

__all__ = ["DesktopEntryApp", "xdg_data_dirs"]

DEFAULT_ICON = "utilities-terminal"


def xdg_data_dirs() -> list[Path]:
    """XDG data directories in lookup order."""
    home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    system = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"
    return [Path(home)] + [Path(d) for d in system.split(":") if d]


class DesktopEntryApp:
    """
    Terminal application known by its desktop id.

    Example:
        >>> app = DesktopEntryApp("org.gnome.Terminal.desktop")
        >>> app.create_icon(64)
        Icon(name='org.gnome.Terminal', size=64)
    """

    def __init__(
        self,
        desktop_id: str,
        data_dirs: list[Path] | None = None,
        fallback_icon: str = DEFAULT_ICON,
    ) -> None:
        self.desktop_id = desktop_id
        self._data_dirs = data_dirs
        self._fallback_icon = fallback_icon
        self._icon_name: str | None = None

    def find_entry(self) -> Path | None:
        """Locate the .desktop file, or None if it is not installed."""
        for data_dir in self._data_dirs or xdg_data_dirs():
            candidate = data_dir / "applications" / self.desktop_id
            if candidate.is_file():
                return candidate
        return None

    @property
    def icon_name(self) -> str:
        """Icon name from the desktop entry, read once."""
        if self._icon_name is None:
            self._icon_name = self._read_icon_name()
        return self._icon_name

    def _read_icon_name(self) -> str:
        entry = self.find_entry()
        if entry is None:
            logger.debug("No desktop entry for %s, using %s", self.desktop_id, self._fallback_icon)
            return self._fallback_icon

        parser = configparser.ConfigParser(interpolation=None, strict=False)
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        try:
            parser.read(entry, encoding="utf-8")
        except configparser.Error as e:
            logger.warning("Unreadable desktop entry %s: %s", entry, e)
            return self._fallback_icon

        return parser.get("Desktop Entry", "Icon", fallback=self._fallback_icon) or self._fallback_icon

    def create_icon(self, size: int) -> Icon:
        """Describe the application icon at ``size`` pixels."""
        return Icon(name=self.icon_name, size=size)
