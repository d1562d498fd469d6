"""Top-level utility commands for `cattocol` CLI."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from cattocol import __version__
from cattocol.core.config import config_paths, get_config

console = Console()


@click.command(name="config")
def config_cmd() -> None:
    """Show the effective configuration."""
    project_path = Path.cwd()
    config = get_config(project_path)
    global_file, project_file = config_paths(project_path)

    console.print("\n[bold]Configuration[/bold]\n")
    console.print(f"Global file: {escape(str(global_file))}")
    project_state = "found" if project_file.exists() else "not found"
    console.print(f"Project file: {escape(str(project_file))} ({project_state})\n")
    console.print(f"Fill: {escape(repr(config.fill))}")
    console.print(f"Repeat: {config.repeat}")
    console.print(f"Escape Aware: {config.escape_aware}")
    console.print(f"Encoding: {escape(config.encoding)}\n")


@click.command(name="version")
def version_cmd() -> None:
    """Show version information."""
    console.print(f"cattocol version {__version__}")


__all__ = ["config_cmd", "version_cmd"]
