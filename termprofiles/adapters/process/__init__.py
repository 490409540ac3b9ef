"""
Process Adapter - Launching the terminal application.
"""

from .launcher import ProcessLauncher

__all__ = ["ProcessLauncher"]
