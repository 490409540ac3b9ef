"""
Interfaces - User-facing entry points.

- cli: Typer command-line host
"""

__all__ = ["cli"]
