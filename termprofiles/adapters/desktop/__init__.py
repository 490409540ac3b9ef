"""
Desktop Adapter - Terminal application metadata from XDG desktop entries.
"""

from .entry import DesktopEntryApp, xdg_data_dirs

__all__ = ["DesktopEntryApp", "xdg_data_dirs"]
