"""
CLI Main - Typer-based command-line host for the search provider.

Usage:
    termprofiles profiles
    termprofiles search work ssh
    termprofiles launch "Work SSH"
    termprofiles version
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

if TYPE_CHECKING:
    from termprofiles.config.settings import Settings
    from termprofiles.domains.profiles import ProfileDirectory
    from termprofiles.domains.search import TerminalSearchProvider

app = typer.Typer(
    name="termprofiles",
    help="Search and launch terminal profiles",
    add_completion=False,
)
console = Console()


class ConsoleHost:
    """Minimal search host that keeps track of enabled providers."""

    def __init__(self) -> None:
        self.providers: list[Any] = []

    def add_search_provider(self, provider: Any) -> None:
        self.providers.append(provider)

    def remove_search_provider(self, provider: Any) -> None:
        if provider in self.providers:
            self.providers.remove(provider)


@app.callback()
def configure(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Configure logging for every command."""
    from termprofiles.config import get_settings

    level = logging.DEBUG if debug or get_settings().debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_provider(
    settings: Settings,
    host: ConsoleHost,
    match_mode: str | None = None,
) -> tuple[TerminalSearchProvider, ProfileDirectory]:
    """Wire the provider to the dconf store, desktop entry and launcher."""
    from termprofiles.adapters import DconfStore, DesktopEntryApp, ProcessLauncher
    from termprofiles.domains.profiles import ProfileDirectory
    from termprofiles.domains.search import ProfileRanker, TermMatchMode, TerminalSearchProvider

    directory = ProfileDirectory.from_settings(DconfStore.from_settings(settings), settings)
    ranker = ProfileRanker(TermMatchMode(match_mode or settings.match_mode))
    provider = TerminalSearchProvider.from_settings(
        directory,
        ranker,
        DesktopEntryApp(settings.terminal_desktop_id),
        ProcessLauncher(),
        settings,
        host=host,
    )
    return provider, directory


async def _enable(
    match_mode: str | None = None,
) -> tuple[TerminalSearchProvider, ProfileDirectory, ConsoleHost]:
    """Enable a provider and wait until its profiles are loaded."""
    from termprofiles.config import get_settings

    host = ConsoleHost()
    provider, directory = build_provider(get_settings(), host, match_mode)
    provider.enable()
    await directory.wait_idle()
    return provider, directory, host


def _no_profiles_panel() -> Panel:
    return Panel(
        "No terminal profiles could be loaded.\n"
        "Check that dconf is installed and gnome-terminal has profiles.",
        title="No Profiles",
        style="yellow",
    )


@app.command()
def profiles() -> None:
    """List the configured terminal profiles."""
    asyncio.run(_profiles_async())


async def _profiles_async() -> None:
    """Async profile listing implementation."""
    provider, directory, _host = await _enable()
    try:
        if not directory.profiles:
            console.print(_no_profiles_panel())
            raise typer.Exit(1)

        table = Table(title=provider.name)
        table.add_column("Name", style="cyan")
        table.add_column("Identifier", style="dim")
        for profile in sorted(directory.profiles, key=lambda p: p.normalized_name):
            table.add_row(profile.name, profile.identifier)
        console.print(table)
    finally:
        provider.disable()


@app.command()
def search(
    terms: list[str] = typer.Argument(..., help="Search terms"),
    mode: str | None = typer.Option(
        None, "--mode", "-m", help="Term matching: all, any or last_term"
    ),
) -> None:
    """Rank terminal profiles against search terms."""
    if mode is not None and mode not in ("all", "any", "last_term"):
        console.print(f"[red]Error:[/red] Unknown mode: {mode}")
        raise typer.Exit(2)

    asyncio.run(_search_async(terms, mode))


async def _search_async(terms: list[str], mode: str | None) -> None:
    """Async search implementation."""
    provider, directory, _host = await _enable(mode)
    try:
        results = provider.get_initial_result_set(terms)
        if not results:
            console.print(f"[yellow]No profiles match:[/yellow] {' '.join(terms)}")
            return

        table = Table(title=f"{provider.name}: {' '.join(terms)}")
        table.add_column("Name", style="cyan")
        table.add_column("Weight", style="green", justify="right")
        table.add_column("Identifier", style="dim")
        for meta, result in zip(provider.get_result_metas(results), results):
            table.add_row(meta.name, str(result.weight), meta.id)
        console.print(table)
    finally:
        provider.disable()


@app.command()
def launch(
    name: str = typer.Argument(..., help="Profile name or part of it"),
) -> None:
    """Open a terminal with the best matching profile."""
    asyncio.run(_launch_async(name))


async def _launch_async(name: str) -> None:
    """Async launch implementation."""
    provider, directory, _host = await _enable()
    try:
        results = provider.get_initial_result_set(name.split())
        if not results:
            console.print(f"[red]Error:[/red] No profile matches '{name}'")
            raise typer.Exit(1)

        exact = [r for r in results if r.profile.normalized_name == name.lower()]
        best = exact[0] if exact else results[0]
        provider.activate_result(best)
        console.print(f"[green]Launched:[/green] {best.name}")
    finally:
        provider.disable()


@app.command()
def version() -> None:
    """Show version information."""
    from termprofiles import __version__

    console.print(f"termprofiles v{__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
