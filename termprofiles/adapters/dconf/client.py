"""
Dconf Store - Configuration store client backed by the ``dconf`` tool.

Features:
- Async subprocess lookups
- Locale passed through the child environment
- Optional fallback to system default values
- Replies validated into StoreReply
"""

from __future__ import annotations

import asyncio
import logging
import os
from typing import TYPE_CHECKING

from termprofiles.config.errors import StoreUnavailableError
from termprofiles.domains.profiles.models import StoreReply

from .gvariant import parse_gvariant_text

if TYPE_CHECKING:
    from termprofiles.config.settings import Settings

logger = logging.getLogger(__name__)

__all__ = ["DconfStore", "STATUS_OK", "STATUS_UNSET"]

STATUS_OK = 0
STATUS_UNSET = 1


class DconfStore:
    """
    Read keys from the dconf database.

    Example:
        >>> store = DconfStore()
        >>> reply = await store.lookup("/org/gnome/terminal/legacy/profiles:/list",
        ...                            "en_US.UTF-8", True)
        >>> reply.value.payload
        ['b1dcc9dd-5262-4d8d-a863-c897e6d979b9']
    """

    def __init__(self, command: str = "dconf", timeout: float = 5.0) -> None:
        """
        Initialize the store client.

        Args:
            command: dconf executable
            timeout: Seconds to wait for a single read
        """
        self.command = command
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> DconfStore:
        return cls(command=settings.dconf_command, timeout=settings.store_timeout)

    async def lookup(
        self,
        path: str,
        locale: str,
        use_schema_default: bool,
    ) -> StoreReply:
        """
        Look up a key.

        Args:
            path: Absolute dconf key path
            locale: Locale for the dconf process
            use_schema_default: Read the system default when the key is unset

        Returns:
            Validated reply; a key without any value has STATUS_UNSET

        Raises:
            StoreUnavailableError: If dconf cannot be run or times out
            MalformedReplyError: If the value cannot be parsed
        """
        status, output, error = await self._read(path, locale)
        if status == STATUS_OK and not output.strip() and use_schema_default:
            logger.debug("Key %s unset, reading default", path)
            status, output, error = await self._read(path, locale, default=True)

        if status != STATUS_OK:
            return StoreReply.from_wire((status, ("s", error.strip())))
        if not output.strip():
            return StoreReply.from_wire((STATUS_UNSET, ("", None)))

        return StoreReply.from_wire((STATUS_OK, parse_gvariant_text(output)))

    async def _read(self, path: str, locale: str, default: bool = False) -> tuple[int, str, str]:
        """Run ``dconf read`` and return (returncode, stdout, stderr)."""
        args = [self.command, "read"]
        if default:
            args.append("-d")
        args.append(path)

        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env={**os.environ, "LANG": locale},
            )
        except OSError as e:
            raise StoreUnavailableError(
                f"Cannot run {self.command}: {e}", {"command": self.command}
            ) from e

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            process.kill()
            await process.wait()
            raise StoreUnavailableError(
                f"{self.command} read timed out after {self.timeout}s", {"path": path}
            ) from e

        return (
            process.returncode if process.returncode is not None else STATUS_OK,
            stdout.decode("utf-8", errors="replace"),
            stderr.decode("utf-8", errors="replace"),
        )
