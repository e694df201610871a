"""reqlens version."""

import platform

import click
import httpx
from rich.console import Console

console = Console()


@click.command()
def version():
    """Show reqlens, httpx and Python versions."""
    from reqlens import __version__

    console.print(f"reqlens {__version__}")
    console.print(f"[dim]httpx {httpx.__version__}, Python {platform.python_version()}[/dim]")
