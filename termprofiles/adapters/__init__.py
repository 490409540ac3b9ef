"""
Adapters - External service integrations.

All calls to dconf, the XDG desktop database and process creation are wrapped
here to isolate domains from the desktop environment.
"""

from .dconf import DconfStore
from .desktop import DesktopEntryApp
from .process import ProcessLauncher

__all__ = [
    "DconfStore",
    "DesktopEntryApp",
    "ProcessLauncher",
]
