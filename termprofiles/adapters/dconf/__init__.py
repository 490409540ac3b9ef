"""
Dconf Adapter - Configuration store client.

This is the ONLY place that talks to dconf.
The profiles domain sees it through the ConfigStore contract.
"""

from .client import STATUS_OK, STATUS_UNSET, DconfStore
from .gvariant import parse_gvariant_text

__all__ = ["DconfStore", "STATUS_OK", "STATUS_UNSET", "parse_gvariant_text"]
