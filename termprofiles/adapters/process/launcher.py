"""
Process Launcher - Fire-and-forget start of external programs.
"""

from __future__ import annotations

import logging
import subprocess

from termprofiles.config.errors import LaunchError

logger = logging.getLogger(__name__)

__all__ = ["ProcessLauncher"]


class ProcessLauncher:
    """
    Start detached processes.

    Example:
        >>> launcher = ProcessLauncher()
        >>> launcher.spawn("gnome-terminal", "--profile", "Work SSH")
    """

    def start(self, command: str, *args: str) -> subprocess.Popen[bytes]:
        """
        Start ``command`` in its own session.

        Raises:
            LaunchError: If the process cannot be started
        """
        argv = [command, *args]
        try:
            process = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise LaunchError(f"Cannot start {command}: {e}", {"argv": argv}) from e

        logger.debug("Started %s (pid %d)", argv, process.pid)
        return process

    def spawn(self, command: str, *args: str) -> None:
        """Start ``command``; failures are logged and not reported."""
        try:
            self.start(command, *args)
        except LaunchError as e:
            logger.warning("Launch failed: %s", e)
