"""
Console helpers shared across the provisioning steps.
"""

from __future__ import annotations

import typer


def section(message: str) -> None:
    """Print a bold cyan section banner, e.g. ``=== Sync objects ===``."""
    typer.echo()
    typer.secho(f"=== {message} ===", fg=typer.colors.CYAN, bold=True)


def info(message: str) -> None:
    typer.echo(message)


def warn(message: str) -> None:
    typer.echo(err=True)
    typer.secho("[WARN]", fg=typer.colors.YELLOW, bold=True, err=True, nl=False)
    typer.echo(f" {message}", err=True)


def error(message: str) -> None:
    typer.echo(err=True)
    typer.secho("[ERROR]", fg=typer.colors.RED, bold=True, err=True, nl=False)
    typer.echo(f" {message}", err=True)
