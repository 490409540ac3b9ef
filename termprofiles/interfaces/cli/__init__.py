"""
CLI Interface - Command-line host for the terminal profile search provider.

Provides commands for:
- Listing profiles
- Ranked search
- Launching a profile
"""

from .main import app, main

__all__ = ["app", "main"]
